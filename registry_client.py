"""
registry_client.py: Genomad registry client.

Sends ONLY the sanitized traits, fingerprint, fitness and confidence.
Source documents never leave the machine.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

import requests

from core.traits.models import RegistrationPayload

logger = logging.getLogger("genomad")


class RegistrationError(RuntimeError):
    """Registry rejected or could not receive the registration."""


class GenomadClient:
    REGISTER_PATH = "/agents/register"

    def __init__(self, base_url: str, timeout: int = 20):
        if not base_url:
            raise ValueError("GENOMAD_API_URL is not set")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def register(self, payload: RegistrationPayload) -> Dict[str, Any]:
        url = f"{self.base_url}{self.REGISTER_PATH}"
        try:
            r = requests.post(url, json=payload.model_dump(), timeout=self.timeout)
        except requests.RequestException as e:
            raise RegistrationError(f"Registry unreachable: {e}") from e

        if r.status_code < 200 or r.status_code >= 300:
            raise RegistrationError(f"Registry error {r.status_code}: {r.text[:200]}")

        logger.info("Agent registered: name=%s hash=%s", payload.name, payload.dnaHash[:16])
        try:
            return r.json()
        except ValueError:
            return {}
