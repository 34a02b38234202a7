"""
Notes API - Bootstrap Procedure
===============================

What:  One-time startup: create the application, prefix its routes,
       publish the API documentation, listen, and log the URL.
Who:   notes_api.main at process start; tests with an injected Settings.

Sequence (each step completes before the next starts):
    1. create the application from the root module
    2. global prefix "api/v1"
    3. documentation descriptor (literal metadata)
    4. OpenAPI document limited to NoteModule
    5. publish it at /api (and /api-json)
    6. listen on settings.port
    7. log the listen URL and a fixed startup line on logger "bootstrap"

Any failure aborts the procedure and propagates to the caller; nothing
done by earlier steps is rolled back.
"""

import logging
from typing import Optional

from notes_api.application import Application, create_application
from notes_api.config import Settings
from notes_api.docs import DocumentDescriptor, create_document, setup_docs
from notes_api.modules import AppModule, NoteModule

logger = logging.getLogger("bootstrap")

GLOBAL_PREFIX = "api/v1"
DOCS_PATH = "api"
STARTED_MESSAGE = "Application successfully started"

DOCS_TITLE = "Notes todo app"
DOCS_DESCRIPTION = "A documentation for notes"
DOCS_VERSION = "1.0"
DOCS_TAG = "Notes"


async def prepare_application(
    settings: Settings, root_module: Optional[AppModule] = None
) -> Application:
    """
    Steps 1-5: a fully configured application that is not listening yet.

    The result can be served in-process through `app.http` (an ASGI app).
    """
    app = await create_application(root_module or AppModule(), settings)
    app.set_global_prefix(GLOBAL_PREFIX)

    descriptor = DocumentDescriptor(
        title=DOCS_TITLE,
        description=DOCS_DESCRIPTION,
        version=DOCS_VERSION,
        tags=(DOCS_TAG,),
    )
    document = create_document(app, descriptor, include=[NoteModule])
    setup_docs(DOCS_PATH, app, document)
    return app


async def bootstrap(
    settings: Settings, root_module: Optional[AppModule] = None
) -> Application:
    """
    Run the full startup procedure and return the listening application.

    Raises:
        ApplicationCreationError: the root module is invalid
        DocumentationError: NoteModule is not imported by the root module
        ListenError: the port is in use or invalid
    """
    app = await prepare_application(settings, root_module)
    await app.listen(settings.port, settings.host)

    logger.info("Listening on %s", await app.get_url())
    logger.info(STARTED_MESSAGE)
    return app
