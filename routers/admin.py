from fastapi import APIRouter
from fastapi.responses import HTMLResponse
from core.config import settings
from core.exceptions import ForbiddenError
from middleware.metrics import fileserver_metrics
from services.auth_service import AuthService
from utils.deps import db_dependency
from utils.logger import get_logger

logger = get_logger(__name__)


router = APIRouter(
    prefix="/admin",
    tags=["admin"]
)

METRICS_PAGE = """
<html>
  <body>
    <h1>Welcome, Chirper Admin</h1>
    <p>Chirper has been visited {hits} times!</p>
  </body>
</html>
"""


@router.get("/metrics", response_class=HTMLResponse)
def metrics():
    return METRICS_PAGE.format(hits=fileserver_metrics.hits)


@router.post("/reset")
def reset(db: db_dependency):
    """
    Delete every user and zero the hit counter. Dev platform only.
    """
    if settings.PLATFORM != "dev":
        raise ForbiddenError("Reset is only allowed in the dev environment")

    deleted = AuthService.delete_all_users(db)
    fileserver_metrics.reset()

    logger.warning("Database reset", extra={"users_deleted": deleted})

    return {"message": "Counter reset"}
