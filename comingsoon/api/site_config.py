from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from comingsoon.core.database import get_db
from comingsoon.middleware.admin_auth import admin_auth
from comingsoon.services import site_config_service
from comingsoon.services.site_config_service import PROJECT_NAME, SITE_TITLE, TARGET_DATE

router = APIRouter(prefix="/config", tags=["config"])


class TargetDateUpdate(BaseModel):
    targetDate: Optional[str] = None


class ProjectNameUpdate(BaseModel):
    projectName: Optional[str] = None


class SiteTitleUpdate(BaseModel):
    siteTitle: Optional[str] = None


@router.get("")
def get_config(db: Session = Depends(get_db)):
    """Public settings for the landing page countdown."""
    return {"success": True, **site_config_service.public_config(db)}


@router.post("/update-target-date")
def update_target_date(
    data: TargetDateUpdate,
    db: Session = Depends(get_db),
    _admin: dict = Depends(admin_auth),
):
    value = site_config_service.set_value(db, TARGET_DATE, data.targetDate)
    return {"success": True, "message": "Target date updated", "targetDate": value}


@router.post("/update-project-name")
def update_project_name(
    data: ProjectNameUpdate,
    db: Session = Depends(get_db),
    _admin: dict = Depends(admin_auth),
):
    value = site_config_service.set_value(db, PROJECT_NAME, data.projectName)
    return {"success": True, "message": "Project name updated", "projectName": value}


@router.post("/update-site-title")
def update_site_title(
    data: SiteTitleUpdate,
    db: Session = Depends(get_db),
    _admin: dict = Depends(admin_auth),
):
    value = site_config_service.set_value(db, SITE_TITLE, data.siteTitle)
    return {"success": True, "message": "Site title updated", "siteTitle": value}
