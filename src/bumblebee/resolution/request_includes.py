from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from bumblebee.model.config_model import BumblebeeConfig
from bumblebee.model.include_model import IncludeSpec

logger = logging.getLogger(__name__)


def query_params_of(context: Any) -> Mapping[str, Any] | None:
    """
    Finds the query-string mapping of a request context.

    Supported shapes: a plain mapping, an object with `query_params`
    (Starlette / FastAPI requests), an object with `args` (Flask / Werkzeug
    requests), or an object with a `request` attribute holding one of those.

    Args:
        context (Any): The bound context.

    Returns:
        Mapping[str, Any] | None: The query parameters, or None if the context
            exposes none.
    """
    if context is None:
        return None
    if isinstance(context, Mapping):
        return context
    for attr in ("query_params", "args"):
        params = getattr(context, attr, None)
        if isinstance(params, Mapping):
            return params
    request = getattr(context, "request", None)
    if request is not None and request is not context:
        return query_params_of(request)
    return None


def include_from_context(context: Any, param: str = "include") -> str | None:
    """
    Reads the include specification from a request context.

    Multi-valued parameters (`?include=author&include=characters.actor`) are
    joined with commas.

    Args:
        context (Any): The bound context.
        param (str): The query parameter name. Defaults to "include".

    Returns:
        str | None: The include specification, or None when absent.
    """
    params = query_params_of(context)
    if params is None:
        return None

    getlist = getattr(params, "getlist", None)
    if callable(getlist):
        values = [str(v) for v in getlist(param)]
    else:
        raw = params.get(param)
        if raw is None:
            return None
        if isinstance(raw, str):
            values = [raw]
        elif isinstance(raw, Sequence):
            values = [str(v) for v in raw]
        else:
            values = [str(raw)]

    joined = ",".join(v for v in values if v)
    return joined or None


def select_include_spec(
        explicit: IncludeSpec,
        context: Any,
        config: BumblebeeConfig) -> IncludeSpec:
    """
    Chooses the include specification of a transformation call.

    An explicit specification wins, even an empty one. Otherwise, when request
    parsing is enabled and a context is bound, the specification is read from
    the context's query parameters. Otherwise nothing is included.

    Args:
        explicit (IncludeSpec): The specification set by the caller, if any.
        context (Any): The bound context, if any.
        config (BumblebeeConfig): The active configuration.

    Returns:
        IncludeSpec: The specification to parse.
    """
    if explicit is not None:
        return explicit
    if config.parse_request and context is not None:
        spec = include_from_context(context, config.include_param)
        logger.debug("Include specification from request: %r", spec)
        return spec
    return None
