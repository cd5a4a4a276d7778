"""Module install/uninstall endpoints."""

from fastapi import APIRouter, HTTPException, Request

from racegate.game import Game
from racegate.modules import ModuleLifecycleError, ModuleManager, available_modules

from .deps import get_storage
from .models import ModuleStatus

router = APIRouter()


def _manager(request: Request) -> ModuleManager:
    return ModuleManager(Game(get_storage(request), settings=request.app.state.settings))


@router.get("/modules")
async def list_modules(request: Request) -> list[ModuleStatus]:
    """List available modules and whether they are installed."""
    manager = _manager(request)
    return [
        ModuleStatus(key=key, name=module.name, installed=manager.is_installed(module))
        for key, module in available_modules().items()
    ]


@router.post("/modules/{key}")
async def install_module(key: str, request: Request):
    """Install a module. Installing twice changes nothing."""
    module = available_modules().get(key)
    if module is None:
        raise HTTPException(404, "Module not found")
    try:
        record = _manager(request).register(module)
    except ModuleLifecycleError as e:
        raise HTTPException(500, str(e))
    return record


@router.delete("/modules/{key}")
async def uninstall_module(key: str, request: Request):
    """Uninstall a module and delete its scenes."""
    module = available_modules().get(key)
    if module is None:
        raise HTTPException(404, "Module not found")
    try:
        _manager(request).unregister(module)
    except ModuleLifecycleError as e:
        raise HTTPException(500, str(e))
    return {"ok": True}
