"""
Notes API - Feature Modules
===========================

A feature module is a named group of routes. The root module lists the
feature modules the application is built from; the application mounts
each one under the global prefix and remembers which routes came from
which module, so documentation can be limited to a chosen set.

Modules:
    NoteModule    notes CRUD (documented)
    HealthModule  /health probe (not documented)
"""

from typing import List, Optional, Sequence

from fastapi import APIRouter, Request

from notes_api.exceptions import ApplicationCreationError
from notes_api.routes import health, notes


class FeatureModule:
    """A named, self-contained group of routes."""

    def __init__(self, name: str, router: APIRouter):
        self.name = name
        self.router = router

    async def mark_request(self, request: Request) -> None:
        """Router dependency: records the owning module as request.state.route_owner."""
        request.state.route_owner = self.name

    def __repr__(self) -> str:
        return f"<FeatureModule(name='{self.name}', routes={len(self.router.routes)})>"


class AppModule:
    """
    Root application module.

    Args:
        imports: feature modules to mount, in order. Defaults to every
                 module shipped with the service.
    """

    def __init__(self, imports: Optional[Sequence[FeatureModule]] = None):
        self.imports: List[FeatureModule] = list(
            imports if imports is not None else (NoteModule, HealthModule)
        )

    def validate(self) -> None:
        """
        Raises:
            ApplicationCreationError: no modules, or two modules sharing a name
        """
        if not self.imports:
            raise ApplicationCreationError(message="The root module imports no feature modules")

        seen = set()
        for feature in self.imports:
            if feature.name in seen:
                raise ApplicationCreationError(
                    message=f"Feature module '{feature.name}' is imported more than once",
                    context={"module": feature.name},
                )
            seen.add(feature.name)


# Owner recorded for the published documentation pages
DOCS_OWNER = "Documentation"

NoteModule = FeatureModule("NoteModule", notes.router)
HealthModule = FeatureModule("HealthModule", health.router)
