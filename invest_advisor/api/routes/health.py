from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/ready")
def ready():
    from invest_advisor.main import composer

    return {
        "status": "ready" if composer is not None else "not_ready",
        "config_loaded": composer is not None,
    }
