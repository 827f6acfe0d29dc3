"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...data.settings_repository import get_optimization_settings
from ...schemas.routing import RoutingRequest, RoutingResponse
from ...schemas.settings import OptimizationSettings
from ...services.routing.service import optimize_routes

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/optimize", response_model=RoutingResponse, status_code=status.HTTP_200_OK)
def optimize(payload: RoutingRequest) -> RoutingResponse:
    try:
        return optimize_routes(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error optimizing routes: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize routes: {str(exc)}"
        ) from exc


@router.get("/settings/{name}", response_model=OptimizationSettings, status_code=status.HTTP_200_OK)
def get_settings_profile(name: str) -> OptimizationSettings:
    """Resolved settings profile; defaults when the store has no usable row."""
    return get_optimization_settings(name)
