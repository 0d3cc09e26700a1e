import asyncio

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.services import sportradar

router = APIRouter(prefix="/api", tags=["Data"])


@router.post("/update-data")
def update_data(db: Session = Depends(get_db)):
    """Refresh teams and today's schedule from Sportradar."""
    # Sync endpoint: runs in the threadpool, so blocking session calls stay off the server loop
    result = asyncio.run(sportradar.update_all(db))
    return {"status": "Data update triggered", **result}


@router.get("/update-data/status")
def update_status():
    return sportradar.get_api_status()
