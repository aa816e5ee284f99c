# file: junior_bot/api/v1/stats.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from junior_bot.db.session import get_db
from junior_bot.schemas.stats import StatsRead
from junior_bot.services.stats_service import get_stats

router = APIRouter()


@router.get("", response_model=StatsRead)
def get_dashboard_stats(db: Session = Depends(get_db)):
    return get_stats(db)
