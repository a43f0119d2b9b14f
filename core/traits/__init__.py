# core/traits/__init__.py
"""
Genomad trait engine.

This package defines:
- The immutable lexicon / delta tables / thresholds (EngineConfig)
- Deterministic lexical scoring with a logarithmic normalizer
- Role, tool and capability boosts capped below the top tier
- Structural trait validation and the anti-gaming fitness guard
- Sanitization + fingerprinting before anything leaves the process
"""
