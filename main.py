import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from alerts import send_block_alert
from config import settings
from core.traits.engine import evaluate_vector, verify_agent
from core.traits.errors import PreconditionError, SuspiciousFitnessBlock, TraitValidationError
from core.traits.models import FitnessResult, VerificationResult
from core.traits.report import build_block_alert, build_registration_payload
from registry_client import GenomadClient, RegistrationError
from workspace import AgentFiles, check_preconditions, extract_agent_name

# -------------------------------------------------------------------
# Logging
# -------------------------------------------------------------------

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("genomad")

logger.info("Block alerts: %s", "ENABLED" if settings.alerts_enabled else "DISABLED")
logger.info("Registry: %s", settings.GENOMAD_API_URL)

# -------------------------------------------------------------------
# FastAPI App
# -------------------------------------------------------------------

app = FastAPI(
    title="Genomad Verify API",
    version="2.0.0",
    description="Genomad: heuristic agent trait scoring with an anti-gaming fitness guard.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

MAX_CAPABILITIES = 200

# -------------------------------------------------------------------
# Models
# -------------------------------------------------------------------

class VerifyRequest(BaseModel):
    soul: str
    identity: str
    tools: str = ""
    capabilities: List[str] = Field(default_factory=list)
    agentName: Optional[str] = None
    submit: bool = False

    @field_validator("capabilities")
    @classmethod
    def validate_capabilities(cls, v: List[str]) -> List[str]:
        if len(v) > MAX_CAPABILITIES:
            raise ValueError(f"At most {MAX_CAPABILITIES} capabilities allowed")
        return [c.strip() for c in v if c and c.strip()]


class VerifyResponse(BaseModel):
    result: VerificationResult
    registered: bool = False


class EvaluateRequest(BaseModel):
    traits: Dict[str, Any]
    agentName: Optional[str] = None


class EvaluateResponse(BaseModel):
    traits: Dict[str, int]
    fitness: FitnessResult
    warnings: List[str] = Field(default_factory=list)

# -------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------

def _blocked(block: SuspiciousFitnessBlock, agent_name: Optional[str], documents: Dict[str, str]) -> HTTPException:
    alert = build_block_alert(block, agent_name=agent_name, documents=documents)
    alert_sent = send_block_alert(alert, settings)
    return HTTPException(
        status_code=403,
        detail={"reason": alert.reason, "fitness": alert.fitness, "alert_sent": alert_sent},
    )


def _invalid(e: TraitValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"errors": e.result.errors, "warnings": e.result.warnings},
    )

# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------

@app.get("/")
def root():
    return {"status": "ok", "service": "Genomad Verify API", "version": "2.0.0"}


@app.get("/health")
def health():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": {
            "api": "operational",
            "alerts": "operational" if settings.alerts_enabled else "not_configured",
        },
    }


@app.post("/verify", response_model=VerifyResponse)
def verify(payload: VerifyRequest):
    files = AgentFiles(
        soul=payload.soul,
        identity=payload.identity,
        tools=payload.tools,
        capabilities=list(payload.capabilities),
    )

    try:
        warnings = check_preconditions(files)
    except PreconditionError as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors, "warnings": e.warnings})

    agent_name = payload.agentName or extract_agent_name(files.identity)
    documents = files.documents()

    try:
        result = verify_agent(
            documents=documents,
            capabilities=files.capabilities,
            agent_name=agent_name,
            warnings=warnings,
        )
    except TraitValidationError as e:
        raise _invalid(e)
    except SuspiciousFitnessBlock as block:
        raise _blocked(block, agent_name, documents)

    registered = False
    if payload.submit:
        client = GenomadClient(settings.GENOMAD_API_URL, settings.REGISTRY_TIMEOUT)
        try:
            client.register(build_registration_payload(result))
        except RegistrationError as e:
            logger.error("Registration failed: %s", e)
            raise HTTPException(status_code=502, detail="Registry unavailable. Please try again.")
        registered = True

    return VerifyResponse(result=result, registered=registered)


@app.post("/evaluate", response_model=EvaluateResponse)
def evaluate(payload: EvaluateRequest):
    try:
        traits, fitness, warnings = evaluate_vector(payload.traits)
    except TraitValidationError as e:
        raise _invalid(e)
    except SuspiciousFitnessBlock as block:
        raise _blocked(block, payload.agentName, {})

    return EvaluateResponse(traits=traits, fitness=fitness, warnings=warnings)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "status_code": exc.status_code, "path": str(request.url)},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
