from fastapi import APIRouter

router = APIRouter()

@router.get("/z")
def healthz():
    # liveness only, no DB round-trip
    return {"status": "ok"}
