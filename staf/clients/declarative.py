"""
================================================================================
Declarative API Services
================================================================================

Describe an API as a class of annotated methods and let the framework turn
each call into an ApiRequest sent through any client backend.

    class BoardService(ApiService):

        @get("/board", response=BoardStatus)
        def get_board(self): ...

        @put("/board/{row}/{column}", response=BoardStatus, body="mark")
        def put_mark(self, row: int, column: int, mark: MarkRequest): ...

    with create_client(ClientType.HTTPX, config) as client:
        status = BoardService(client).get_board().body

Binding rules:
    - Parameters whose name appears in the path template are path params
    - Names listed in `query` become query parameters (None values dropped)
    - Names listed in `form` become url-encoded form fields (None dropped)
    - The name given as `body` is serialized as the request body
    - A parameter called `headers` adds per-call headers
    - Anything else is rejected when the class is defined

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import functools
import inspect
import string
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from ..api.client import BaseApiClient
from ..api.model import ApiRequest, ApiResponse, Method


HEADERS_PARAMETER = "headers"


@dataclass(frozen=True)
class Endpoint:
    """Static description of a declared endpoint."""
    method: Method
    path: str
    response: Any = None
    path_names: Tuple[str, ...] = ()
    query: Tuple[str, ...] = ()
    form: Tuple[str, ...] = ()
    body: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)


class ApiService:
    """
    Base class for declarative services.

    Args:
        client: Any opened BaseApiClient backend
        default_headers: Headers added to every call of this service
    """

    def __init__(
        self,
        client: BaseApiClient,
        default_headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.client = client
        self.default_headers = dict(default_headers or {})


def endpoint(
    method: Method,
    path: str,
    *,
    response: Any = None,
    query: Iterable[str] = (),
    form: Iterable[str] = (),
    body: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Callable[[Callable[..., Any]], Callable[..., ApiResponse]]:
    """
    Declare a service method as an HTTP endpoint.

    Args:
        method: HTTP method
        path: Path template with {name} placeholders
        response: Response body type (see ApiRequest.response_body_type)
        query: Parameter names sent as query string
        form: Parameter names sent as form fields
        body: Parameter name sent as request body
        headers: Static headers for this endpoint

    Raises:
        TypeError: When the signature and the declaration disagree
    """
    query = tuple(query)
    form = tuple(form)
    static_headers = dict(headers or {})
    path_names = tuple(
        name for _, name, _, _ in string.Formatter().parse(path) if name
    )

    def decorator(func: Callable[..., Any]) -> Callable[..., ApiResponse]:
        signature = inspect.signature(func)
        parameters = list(signature.parameters)
        if not parameters:
            raise TypeError(f"{func.__qualname__} must be a method taking 'self'")
        self_name, arguments = parameters[0], parameters[1:]

        declared = set(path_names) | set(query) | set(form) | ({body} if body else set())
        not_in_signature = sorted(declared - set(arguments))
        if not_in_signature:
            raise TypeError(
                f"{func.__qualname__}: declared parameters {not_in_signature} "
                f"are missing from the signature"
            )
        unbound = [
            name for name in arguments
            if name not in declared and name != HEADERS_PARAMETER
        ]
        if unbound:
            raise TypeError(
                f"{func.__qualname__}: parameters {unbound} are not bound to "
                f"path, query, form or body"
            )
        if form and body:
            raise TypeError(f"{func.__qualname__}: cannot declare both form and body")

        spec = Endpoint(
            method=method,
            path=path,
            response=response,
            path_names=path_names,
            query=query,
            form=form,
            body=body,
            headers=static_headers,
        )

        @functools.wraps(func)
        def wrapper(self: ApiService, *args: Any, **kwargs: Any) -> ApiResponse:
            bound = signature.bind(self, *args, **kwargs)
            bound.apply_defaults()
            values = dict(bound.arguments)
            values.pop(self_name, None)

            request = ApiRequest(
                method=spec.method,
                path=spec.path,
                path_params={name: values[name] for name in spec.path_names},
                params={name: values[name] for name in spec.query},
                form={name: values[name] for name in spec.form} if spec.form else None,
                body=values[spec.body] if spec.body else None,
                headers={
                    **self.default_headers,
                    **spec.headers,
                    **(values.get(HEADERS_PARAMETER) or {}),
                },
                response_body_type=spec.response,
            )
            return self.client.send_request(request)

        wrapper.endpoint = spec
        return wrapper

    return decorator


def get(path: str, **options: Any):
    """Declare a GET endpoint."""
    return endpoint(Method.GET, path, **options)


def post(path: str, **options: Any):
    """Declare a POST endpoint."""
    return endpoint(Method.POST, path, **options)


def put(path: str, **options: Any):
    """Declare a PUT endpoint."""
    return endpoint(Method.PUT, path, **options)


def patch(path: str, **options: Any):
    """Declare a PATCH endpoint."""
    return endpoint(Method.PATCH, path, **options)


def delete(path: str, **options: Any):
    """Declare a DELETE endpoint."""
    return endpoint(Method.DELETE, path, **options)


__all__ = [
    "ApiService",
    "Endpoint",
    "endpoint",
    "get",
    "post",
    "put",
    "patch",
    "delete",
]
