"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from services.bridge import Bridge, get_bridge
from services.config_manager import ConfigManager

router = APIRouter()


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    backend: dict | None = None
    completions: dict | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    backend: dict
    completions: dict


class ToggleResponse(BaseModel):
    """Completions toggle response"""

    enabled: bool
    message: str


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    config = ConfigManager.get_instance().get_config()
    return ConfigResponse(
        backend=config.get("backend", {}),
        completions=config.get("completions", {}),
    )


@router.put("")
async def update_config(
    request: ConfigUpdateRequest, bridge: Bridge = Depends(get_bridge)
) -> dict[str, Any]:
    """Update configuration"""
    config_manager = ConfigManager.get_instance()
    current_config = config_manager.get_config()

    # Update only provided fields
    if request.backend:
        current_config["backend"] = {**current_config.get("backend", {}), **request.backend}
    if request.completions:
        current_config["completions"] = {
            **current_config.get("completions", {}),
            **request.completions,
        }

    config_manager.save_config(current_config)
    bridge.apply_config(current_config)

    return {"status": "success", "message": "Configuration updated"}


@router.post("/completions/toggle", response_model=ToggleResponse)
async def toggle_completions() -> ToggleResponse:
    """Flip the proactive completions switch"""
    config_manager = ConfigManager.get_instance()
    current_config = config_manager.get_config()

    enabled = not current_config["completions"].get("enabled", True)
    current_config["completions"] = {**current_config["completions"], "enabled": enabled}
    config_manager.save_config(current_config)

    return ToggleResponse(
        enabled=enabled,
        message=f"DevAlley completions {'enabled' if enabled else 'disabled'}",
    )
