import importlib
import inspect
import pkgutil

from fastapi import APIRouter, FastAPI
from loguru import logger


def discover_routers(
    package_name: str = "srbrowser.api", recursive: bool = True
) -> list[tuple[APIRouter, str]]:
    """
    Discover all router instances in a package.

    Args:
        package_name: The package to scan for routers.
        recursive: Whether to recursively scan subpackages.

    Returns:
        A list of tuples containing the router instance and its subpath (if any).
    """
    routers: list[tuple[APIRouter, str]] = []

    package = importlib.import_module(package_name)
    package_path = getattr(package, "__path__", None)

    if not package_path:
        logger.warning(f"Cannot scan {package_name} for routers as it's not a package")
        return routers

    for _, module_name, is_pkg in pkgutil.iter_modules(package_path):
        full_module_name = f"{package_name}.{module_name}"

        if is_pkg and recursive:
            routers.extend(discover_routers(package_name=full_module_name, recursive=recursive))
            continue

        try:
            module = importlib.import_module(full_module_name)
        except ImportError as e:
            logger.error(f"Error importing module {full_module_name}: {e}")
            continue

        # Only the router defined by the module itself, not ones it imported
        router = getattr(module, "router", None)
        if isinstance(router, APIRouter):
            # srbrowser.api.v2.games -> /v2
            parts = package_name.split(".")
            subpath = f"/{parts[2]}" if len(parts) > 2 else ""

            routers.append((router, subpath))
            logger.info(f"Discovered router in {full_module_name}")

    return routers


def register_routers(app: FastAPI, prefix: str = "/api") -> None:
    """
    Register all routers in the srbrowser.api package with the FastAPI app.

    Args:
        app: The FastAPI app.
        prefix: The prefix to add to all routes.
    """
    for router, subpath in discover_routers():
        app.include_router(router, prefix=f"{prefix}{subpath}")
