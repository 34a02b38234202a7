"""
Notes API - Application Instance
================================

What:  Wraps the FastAPI instance with the operations the bootstrap needs:
       global route prefix, module mounting, listening on a socket, and
       reporting the listen URL.
How:   Feature routers are mounted lazily by init(), after the prefix is
       fixed. listen() binds the socket itself, then runs a uvicorn Server
       on it as a task of the current event loop.

Lifecycle:
    create_application() → set_global_prefix() → init() → listen()
        → get_url() → ... → wait_closed() / close()
"""

import asyncio
import errno
import logging
import socket
from typing import Dict, List, Optional, Sequence, Tuple

import uvicorn
from fastapi import Depends, FastAPI
from starlette.routing import BaseRoute

from notes_api.config import Settings
from notes_api.exceptions import BootstrapError, DocumentationError, ListenError
from notes_api.factory import create_http_app
from notes_api.modules import AppModule, FeatureModule

logger = logging.getLogger(__name__)

# How often listen() checks whether uvicorn finished its startup
STARTUP_POLL_INTERVAL = 0.01

# bind() errors meaning "no IPv6 on this host" rather than "port unavailable"
_NO_IPV6_ERRNOS = (errno.EAFNOSUPPORT, errno.EADDRNOTAVAIL)


def bind_socket(host: str, port: int) -> socket.socket:
    """
    Create a TCP socket bound to host:port.

    "::" binds dual-stack, so IPv4 clients are accepted too. On hosts
    without IPv6 it falls back to "0.0.0.0".

    Raises:
        OSError: address in use or host unknown
        OverflowError: port outside 0-65535
    """
    wildcard_v6 = host == "::"
    if wildcard_v6 and not socket.has_ipv6:
        return bind_socket("0.0.0.0", port)

    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    try:
        sock = socket.socket(family, socket.SOCK_STREAM)
    except OSError as e:
        if wildcard_v6 and e.errno in _NO_IPV6_ERRNOS:
            return bind_socket("0.0.0.0", port)
        raise

    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        if wildcard_v6:
            sock.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, 0)
        sock.bind((host, port))
    except OSError as e:
        sock.close()
        if wildcard_v6 and e.errno in _NO_IPV6_ERRNOS:
            return bind_socket("0.0.0.0", port)
        raise
    except Exception:
        sock.close()
        raise
    sock.set_inheritable(True)
    return sock


def format_url(host: str, port: int, scheme: str = "http") -> str:
    """
    URL clients can use to reach a listener bound to host:port.

    Wildcard addresses are replaced by the matching loopback address.
    """
    if host in ("", "0.0.0.0"):
        host = "127.0.0.1"
    elif host == "::":
        host = "[::1]"
    elif ":" in host:
        host = f"[{host}]"
    return f"{scheme}://{host}:{port}"


class Application:
    """
    A configured web application made from a root module.

    Attributes:
        http:           the underlying FastAPI instance (an ASGI app)
        module:         the root module it was created from
        global_prefix:  path prefix for every feature route, e.g. "/api/v1"
    """

    def __init__(self, http: FastAPI, module: AppModule, settings: Settings):
        self.http = http
        self.module = module
        self.settings = settings
        self.global_prefix = ""
        self._initialized = False
        self._module_routes: Dict[str, List[BaseRoute]] = {}
        self._server: Optional[uvicorn.Server] = None
        self._serve_task: Optional[asyncio.Task] = None
        self._address: Optional[Tuple[str, int]] = None

    # ── Routing ───────────────────────────────────────────────────────────

    def set_global_prefix(self, prefix: str) -> "Application":
        """
        Prefix every feature route with `prefix` ("api/v1" → "/api/v1/...").

        Routes added directly to `http` afterwards (documentation) are not
        affected.
        """
        if self._initialized:
            raise BootstrapError(
                message="The global prefix must be set before the application is initialized",
                context={"prefix": prefix},
            )
        cleaned = prefix.strip("/")
        self.global_prefix = f"/{cleaned}" if cleaned else ""
        return self

    def init(self) -> "Application":
        """Mount every imported feature module. Safe to call more than once."""
        if self._initialized:
            return self

        for feature in self.module.imports:
            start = len(self.http.router.routes)
            self.http.include_router(
                feature.router,
                prefix=self.global_prefix,
                dependencies=[Depends(feature.mark_request)],
            )
            self._module_routes[feature.name] = list(self.http.router.routes[start:])
            logger.debug(
                "Mounted %s (%d routes) under '%s'",
                feature.name,
                len(self._module_routes[feature.name]),
                self.global_prefix or "/",
            )

        self._initialized = True
        return self

    def routes_for(self, modules: Sequence[FeatureModule]) -> List[BaseRoute]:
        """
        Route entries the given modules added to the FastAPI router.

        Depending on the FastAPI version an included router contributes
        either its individual routes or a single entry wrapping them.
        get_openapi() renders both forms, so the result is meant to be
        passed there, not inspected route by route.

        Raises:
            DocumentationError: a module is not imported by this application
        """
        self.init()
        routes: List[BaseRoute] = []
        for feature in modules:
            if feature.name not in self._module_routes:
                raise DocumentationError(module_name=feature.name)
            routes.extend(self._module_routes[feature.name])
        return routes

    @property
    def module_routes(self) -> List[BaseRoute]:
        """Route entries of every feature module, in mount order."""
        return self.routes_for(self.module.imports)

    # ── Network ───────────────────────────────────────────────────────────

    async def listen(self, port: int, host: Optional[str] = None) -> None:
        """
        Start serving on host:port and return once connections are accepted.

        Raises:
            ListenError: the socket could not be bound, or the server stopped
                         before finishing startup
        """
        if self._server is not None:
            raise BootstrapError(message="The application is already listening")

        self.init()
        host = host if host is not None else self.settings.host

        try:
            sock = bind_socket(host, port)
        except (OSError, OverflowError) as e:
            reason = getattr(e, "strerror", None) or str(e)
            raise ListenError(host=host, port=port, reason=reason) from e

        self._address = sock.getsockname()[:2]

        config = uvicorn.Config(
            self.http,
            log_config=None,
            access_log=False,
            lifespan="on",
        )
        server = uvicorn.Server(config)
        task = asyncio.create_task(server.serve(sockets=[sock]))

        while not server.started:
            if task.done():
                sock.close()
                self._address = None
                reason = "server stopped during startup"
                if not task.cancelled() and task.exception() is not None:
                    reason = str(task.exception())
                raise ListenError(host=host, port=port, reason=reason)
            await asyncio.sleep(STARTUP_POLL_INTERVAL)

        self._server = server
        self._serve_task = task

    async def get_url(self) -> str:
        """URL of the open listener, e.g. http://127.0.0.1:3000."""
        if self._address is None:
            raise BootstrapError(message="listen() must be called before get_url()")
        host, port = self._address
        return format_url(host, port)

    async def wait_closed(self) -> None:
        """Block until the server stops (signal or close())."""
        if self._serve_task is not None:
            await self._serve_task

    async def close(self) -> None:
        """Ask the server to stop and wait for its shutdown to finish."""
        if self._server is None:
            return
        self._server.should_exit = True
        await self.wait_closed()
        self._server = None
        self._serve_task = None


async def create_application(module: AppModule, settings: Settings) -> Application:
    """
    Create an application instance from the root module.

    Raises:
        ApplicationCreationError: the root module is invalid
    """
    module.validate()
    return Application(create_http_app(settings), module, settings)
