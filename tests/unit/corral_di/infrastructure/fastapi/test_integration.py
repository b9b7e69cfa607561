"""Unit tests for FastAPI integration."""

from types import SimpleNamespace
from unittest.mock import Mock

import pytest

pytest.importorskip("fastapi")

from fastapi import FastAPI, Request
from starlette.responses import Response

from corral_di.application.container import Container
from corral_di.domain.exceptions import NotFoundError
from corral_di.infrastructure.fastapi_integration.integration import (
    ContainerMiddleware,
    create_fastapi_dependency,
    create_request_dependency,
)


def make_request(**state):
    request = Mock(spec=Request)
    request.state = SimpleNamespace(**state)
    return request


class TestCreateFastAPIDependency:
    """Test cases for create_fastapi_dependency function."""

    def test_creates_dependency_function(self):
        """Test that create_fastapi_dependency returns a callable."""
        container = Container()

        class TestService:
            pass

        dependency_func = create_fastapi_dependency(container, TestService)

        assert callable(dependency_func)

    def test_dependency_function_makes_from_container(self):
        """Test that the dependency function makes the bound class."""
        container = Container()

        class Repository:
            pass

        class SqlRepository(Repository):
            pass

        container.bind(Repository, SqlRepository)

        instance = create_fastapi_dependency(container, Repository)()

        assert isinstance(instance, SqlRepository)

    def test_dependency_function_returns_shared_instance(self):
        """Test that shared bindings return the same instance on every call."""
        container = Container()

        class SharedService:
            pass

        container.bind(SharedService).set_shared()

        dependency_func = create_fastapi_dependency(container, SharedService)

        assert dependency_func() is dependency_func()

    def test_dependency_function_returns_new_transient_instances(self):
        """Test that non-shared bindings return different instances."""
        container = Container()

        class TransientService:
            pass

        container.bind(TransientService)

        dependency_func = create_fastapi_dependency(container, TransientService)

        assert dependency_func() is not dependency_func()

    def test_dependency_function_passes_arguments(self):
        """Test that caller arguments are passed to make()."""
        container = Container()

        class Paginator:
            def __init__(self, page_size=10):
                self.page_size = page_size

        dependency_func = create_fastapi_dependency(container, Paginator, {"page_size": 50})

        assert dependency_func().page_size == 50

    def test_dependency_function_does_not_share_argument_dict(self):
        """Test that make() receives a copy of the arguments on each call."""
        container = Mock()
        arguments = {"page_size": 50}

        create_fastapi_dependency(container, "paginator", arguments)()

        passed = container.make.call_args.args[1]
        assert passed == arguments
        assert passed is not arguments

    def test_dependency_function_propagates_errors(self):
        """Test that resolution errors reach FastAPI unchanged."""
        container = Container()

        with pytest.raises(NotFoundError):
            create_fastapi_dependency(container, "missing")()


class TestCreateRequestDependency:
    """Test cases for create_request_dependency function."""

    def test_resolves_from_request_container(self):
        """Test that the dependency resolves from request.state.di_container."""
        container = Container()

        class RequestContext:
            pass

        request = make_request(di_container=container)

        instance = create_request_dependency(RequestContext)(request)

        assert isinstance(instance, RequestContext)

    def test_resolves_nested_dependencies(self):
        """Test that autowiring works through the request container."""
        container = Container()

        class DatabaseConnection:
            pass

        class RequestContext:
            def __init__(self, db: DatabaseConnection):
                self.db = db

        container.bind(DatabaseConnection).set_shared()
        request = make_request(di_container=container)

        instance = create_request_dependency(RequestContext)(request)

        assert instance.db is container.make(DatabaseConnection)

    def test_missing_middleware_raises(self):
        """Test that a request without container raises RuntimeError."""
        request = make_request()

        with pytest.raises(RuntimeError, match="ContainerMiddleware"):
            create_request_dependency("service")(request)


class TestContainerMiddleware:
    """Test cases for ContainerMiddleware."""

    def test_middleware_initialization(self):
        """Test that middleware initializes correctly."""
        app = FastAPI()
        container = Container()

        middleware = ContainerMiddleware(app, container)

        assert middleware.container is container
        assert middleware.app is app

    @pytest.mark.asyncio
    async def test_middleware_attaches_container(self):
        """Test that the container is attached before the endpoint runs."""
        app = FastAPI()
        container = Container()
        middleware = ContainerMiddleware(app, container)
        request = make_request()

        async def mock_call_next(req):
            assert req.state.di_container is container
            return Response("OK", status_code=200)

        response = await middleware.dispatch(request, mock_call_next)

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_middleware_passes_response_through(self):
        """Test that middleware passes the response through unchanged."""
        app = FastAPI()
        middleware = ContainerMiddleware(app, Container())
        expected_response = Response("Custom Response", status_code=201)

        async def mock_call_next(req):
            return expected_response

        response = await middleware.dispatch(make_request(), mock_call_next)

        assert response is expected_response

    @pytest.mark.asyncio
    async def test_middleware_propagates_exceptions(self):
        """Test that endpoint exceptions are not swallowed."""
        app = FastAPI()
        middleware = ContainerMiddleware(app, Container())

        async def mock_call_next(req):
            raise ValueError("Test error")

        with pytest.raises(ValueError, match="Test error"):
            await middleware.dispatch(make_request(), mock_call_next)
