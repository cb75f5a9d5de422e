#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache

from fastapi import Depends, Header, HTTPException

from core.app_context import AppContext
from core.applications.service import ApplicationService
from core.resume.store import ResumeStore
from core.search.service import JobSearchService
from .config import get_config


@lru_cache()
def get_app_context() -> AppContext:
    """The wired application, built once per process."""
    return AppContext.build(get_config())


def get_current_user_id(x_user_id: str = Header(default="")) -> str:
    """
    Identify the caller.

    Session handling lives in front of this service; it forwards the
    authenticated user id in the X-User-Id header.
    """
    user_id = x_user_id.strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return user_id


def get_search_service(ctx: AppContext = Depends(get_app_context)) -> JobSearchService:
    return ctx.search_service


def get_application_service(ctx: AppContext = Depends(get_app_context)) -> ApplicationService:
    return ctx.application_service


def get_resume_store(ctx: AppContext = Depends(get_app_context)) -> ResumeStore:
    return ctx.resumes
