"""Cache-aside decorator for FastAPI read endpoints.

Place it under the route decorator:

    @router.get("/{album_id}", response_model=AlbumResponse | None)
    @cache_aside(ttl=120)
    async def get_album(album_id: int, albums: Annotated[..., Depends(...)]): ...

The operation signature is the request path plus the endpoint's bound
arguments. Arguments injected by FastAPI (Depends/Security parameters,
Request, Response, BackgroundTasks) are excluded from the key. The cache
executor comes from get_cache_aside, so the endpoint needs no extra
parameters.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Annotated, Any, get_args, get_origin

from fastapi import BackgroundTasks, Depends, Request, Response, params
from starlette.requests import HTTPConnection

from scaling_reads.api.v1.dependencies.cache import get_cache_aside
from scaling_reads.infrastructure.cache.cache_aside import CacheAside, validate_ttl
from scaling_reads.infrastructure.cache.keys import OperationSignature

_REQUEST_PARAM = "_cache_request"
_EXECUTOR_PARAM = "_cache_aside"
_INJECTED_TYPES = (HTTPConnection, Response, BackgroundTasks)


def _base_annotation(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Split Annotated[T, ...] into (T, metadata); other annotations have no metadata."""
    if get_origin(annotation) is Annotated:
        base, *metadata = get_args(annotation)
        return base, tuple(metadata)
    return annotation, ()


def _is_injected(param: inspect.Parameter) -> bool:
    """True for parameters FastAPI fills from the environment, not from the request input."""
    if isinstance(param.default, params.Depends):
        return True
    base, metadata = _base_annotation(param.annotation)
    if any(isinstance(m, params.Depends) for m in metadata):
        return True
    return inspect.isclass(base) and issubclass(base, _INJECTED_TYPES)


def _request_param_name(signature: inspect.Signature) -> str | None:
    for name, param in signature.parameters.items():
        base, _ = _base_annotation(param.annotation)
        if inspect.isclass(base) and issubclass(base, Request):
            return name
    return None


def _with_extra_params(
    signature: inspect.Signature, extra: list[inspect.Parameter]
) -> inspect.Signature:
    """Append keyword-only parameters, keeping **kwargs (if any) last."""
    parameters = list(signature.parameters.values())
    var_keyword = [p for p in parameters if p.kind is inspect.Parameter.VAR_KEYWORD]
    regular = [p for p in parameters if p.kind is not inspect.Parameter.VAR_KEYWORD]
    return signature.replace(parameters=regular + extra + var_keyword)


def cache_aside(
    ttl: int | None = None,
) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[Any]]]:
    """Decorator to serve an async read endpoint through the cache-aside executor.

    Args:
        ttl: Time-to-live in seconds for this endpoint; None uses the
            executor's default (settings.cache_default_ttl).

    Returns:
        Decorator producing an endpoint with the same public parameters.

    Raises:
        ValueError: ttl is not a positive integer.
    """
    if ttl is not None:
        validate_ttl(ttl)

    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        signature = inspect.signature(func, eval_str=True)
        injected = frozenset(
            name for name, param in signature.parameters.items() if _is_injected(param)
        )
        request_param = _request_param_name(signature)
        extra: list[inspect.Parameter] = []
        if request_param is None:
            extra.append(
                inspect.Parameter(
                    _REQUEST_PARAM, inspect.Parameter.KEYWORD_ONLY, annotation=Request
                )
            )
        extra.append(
            inspect.Parameter(
                _EXECUTOR_PARAM,
                inspect.Parameter.KEYWORD_ONLY,
                annotation=CacheAside,
                default=Depends(get_cache_aside),
            )
        )

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            executor: CacheAside = kwargs.pop(_EXECUTOR_PARAM)
            if request_param is None:
                request: Request = kwargs.pop(_REQUEST_PARAM)
            else:
                request = kwargs[request_param]
            operation = OperationSignature(
                name=request.url.path,
                arguments=dict(kwargs),
                excluded=injected,
            )
            return await executor.get_or_execute(
                operation, lambda: func(*args, **kwargs), ttl=ttl
            )

        wrapper.__signature__ = _with_extra_params(signature, extra)  # type: ignore[attr-defined]
        return wrapper

    return decorator
