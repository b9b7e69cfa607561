from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from corral_di.domain import IContainer, Identifier


def create_fastapi_dependency(
    container: IContainer,
    id_or_class: Identifier,
    arguments: Optional[Dict[str, Any]] = None,
) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that makes an object from the container.

    Shared bindings hand out the same instance on every request; other
    bindings build a new instance per call.

    Args:
        container: The DI container to resolve from.
        id_or_class: The identifier or class to make when the dependency is called.
        arguments: Optional caller arguments passed to ``make`` on every call.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> container = Container()
        >>> container.bind(UserRepository, SqlUserRepository).set_shared()
        >>>
        >>> get_user_repo = create_fastapi_dependency(container, UserRepository)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(repo: UserRepository = Depends(get_user_repo)):
        ...     return await repo.get_all()
    """

    def dependency() -> Any:
        """Make the dependency from the container."""
        return container.make(id_or_class, dict(arguments) if arguments else None)

    return dependency


def create_request_dependency(id_or_class: Identifier) -> Callable[[Request], Any]:
    """Create a FastAPI dependency that makes an object from the request's container.

    Requires the ContainerMiddleware to be installed.

    Args:
        id_or_class: The identifier or class to make.

    Returns:
        A callable resolving from ``request.state.di_container``.

    Example:
        >>> app.add_middleware(ContainerMiddleware, container=container)
        >>>
        >>> get_settings = create_request_dependency("app.settings")
        >>>
        >>> @app.get("/settings")
        >>> async def read_settings(settings: AppSettings = Depends(get_settings)):
        ...     return settings.public_view()
    """

    def request_dependency(request: Request) -> Any:
        """Make the dependency from the request's container."""
        if not hasattr(request.state, "di_container"):
            raise RuntimeError(
                "Request does not have a DI container. Did you forget to add ContainerMiddleware?"
            )
        container: IContainer = request.state.di_container
        return container.make(id_or_class)

    return request_dependency


class ContainerMiddleware(BaseHTTPMiddleware):
    """Middleware that exposes the DI container on every request.

    The container is accessible via ``request.state.di_container``, which is
    what ``create_request_dependency`` resolves from.

    Attributes:
        container: The DI container handed to request handlers.

    Example:
        >>> container = Container()
        >>> container.bind(DatabaseConnection).set_shared()
        >>>
        >>> app = FastAPI()
        >>> app.add_middleware(ContainerMiddleware, container=container)
        >>>
        >>> @app.get("/")
        >>> async def root(request: Request):
        ...     db = request.state.di_container.get(DatabaseConnection)
        ...     return {"connected": db.is_connected()}
    """

    def __init__(self, app: FastAPI, container: IContainer):
        """Initialize the middleware with the container.

        Args:
            app: The FastAPI/Starlette application.
            container: The DI container to expose.
        """
        super().__init__(app)
        self.container = container

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Attach the container to the request and execute the endpoint.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            The response from the endpoint.
        """
        request.state.di_container = self.container
        return await call_next(request)
