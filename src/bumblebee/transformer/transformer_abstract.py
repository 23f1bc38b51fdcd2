from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from typing import Any, ClassVar, TypeVar

from bumblebee.errors import InvalidIncludeError, InvalidTransformerError, MissingIncludeHandlerError
from bumblebee.model.resource_model import CollectionResource, ItemResource, NullResource, Pagination
from bumblebee.resolution.name_matcher import handler_name, snake_case
from bumblebee.resolution.resolution_context_vars import current_resolution_scope
from bumblebee.resolution.resolution_scope_model import ResolutionScope

F = TypeVar("F", bound=Callable[..., Any])

_HANDLER_PREFIX = "include_"
_HANDLER_ATTR = "__bumblebee_include__"


def include_handler(name: str) -> Callable[[F], F]:
    """
    Marks a method as the handler of a declared include, for names whose
    conventional `include_<snake_case>` method name does not fit.

    Args:
        name (str): The declared include name the method handles.

    Returns:
        Callable[[F], F]: A decorator returning the method unchanged.
    """
    def decorator(fn: F) -> F:
        setattr(fn, _HANDLER_ATTR, name)
        return fn

    return decorator


def _validate_declared(names: Sequence[str], owner: str) -> None:
    handled_by: dict[str, str] = {}
    for name in names:
        if not isinstance(name, str) or not name:
            raise InvalidIncludeError(
                f"{owner} declares an invalid include name {name!r}",
                context={"transformer": owner, "include": repr(name)})
        if "," in name or "." in name:
            raise InvalidIncludeError(
                f"{owner} declares include {name!r}; include names cannot contain ',' or '.'",
                context={"transformer": owner, "include": name})
        # one declared spelling per handler
        other = handled_by.setdefault(snake_case(name), name)
        if other != name:
            raise InvalidIncludeError(
                f"{owner} declares both {other!r} and {name!r}; both are handled by {handler_name(name)}()",
                context={"transformer": owner, "include": name, "conflicts_with": other})


class TransformerAbstract(ABC):
    """
    Base class of every transformer.

    A transformer shapes one kind of resource: `transform` produces the primary
    fields, and includes expose optional relations the caller can ask for.

    Includes are declared with `available_includes` (resolved only when
    requested) and `default_includes` (always resolved), either as class
    attributes or as methods returning the names. Each declared include needs a
    handler: a method named `include_<snake_case name>`, so `authorName` and
    `author_name` are both handled by `include_author_name`, or a method marked
    with `@include_handler("name")`. Handlers are bound once, when the class is
    created.

    A handler receives the resource and returns `self.item(...)`,
    `self.collection(...)`, `self.null()`, or any other value, which is merged
    as-is. `transform` and handlers may be coroutines.

    Variants are alternative `transform` methods named `transform_<variant>`.

    Example::

        class BookTransformer(TransformerAbstract):
            available_includes = ("author",)

            def transform(self, book):
                return {"title": book["title"]}

            def include_author(self, book):
                return self.item(book["author"], AuthorTransformer)
    """

    available_includes: ClassVar[Sequence[str] | Callable[..., Sequence[str]]] = ()
    default_includes: ClassVar[Sequence[str] | Callable[..., Sequence[str]]] = ()

    # handler key -> method name; keys are explicit names or snake_case suffixes
    _include_handlers: ClassVar[Mapping[str, str]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        explicit: dict[str, str] = {}
        conventional: dict[str, str] = {}
        for klass in reversed(cls.__mro__):
            for attr, value in vars(klass).items():
                if not callable(value):
                    continue
                declared = getattr(value, _HANDLER_ATTR, None)
                if declared is not None:
                    explicit[declared] = attr
                elif attr.startswith(_HANDLER_PREFIX):
                    conventional[attr[len(_HANDLER_PREFIX):]] = attr
        # explicit bindings shadow conventional ones
        cls._include_handlers = {**conventional, **explicit}

    @abstractmethod
    def transform(self, resource: Any) -> Any:
        """
        Produces the primary output fields of a resource.

        Args:
            resource (Any): The resource to transform.

        Returns:
            Any: Usually a dict. Includes are only merged into mapping output.
        """
        raise NotImplementedError

    def transform_variant(self, resource: Any, variant: str) -> Any:
        """
        Runs the `transform_<variant>` method of this transformer.

        Raises:
            InvalidTransformerError: If the transformer has no such variant.
        """
        method = getattr(self, f"transform_{snake_case(variant)}", None)
        if method is None or not callable(method):
            raise InvalidTransformerError(
                f"{type(self).__name__} has no transform variant {variant!r}",
                context={"transformer": type(self).__qualname__, "variant": variant})
        return method(resource)

    def get_available_includes(self) -> tuple[str, ...]:
        return self._declared(self.available_includes)

    def get_default_includes(self) -> tuple[str, ...]:
        return self._declared(self.default_includes)

    def _declared(self, declaration: Sequence[str] | Callable[..., Sequence[str]]) -> tuple[str, ...]:
        names = declaration() if callable(declaration) else declaration
        names = tuple(names or ())
        _validate_declared(names, type(self).__qualname__)
        return names

    def handler_for(self, name: str) -> Callable[[Any], Any]:
        """
        Returns the bound handler of a declared include.

        Args:
            name (str): The declared include name.

        Returns:
            Callable[[Any], Any]: The bound handler method.

        Raises:
            MissingIncludeHandlerError: If no handler is bound for the include.
        """
        attr = self._include_handlers.get(name) or self._include_handlers.get(snake_case(name))
        if attr is None:
            raise MissingIncludeHandlerError(
                f"{type(self).__name__} declares include {name!r} but has no "
                f"{handler_name(name)}() handler",
                context={"transformer": type(self).__qualname__, "include": name})
        return getattr(self, attr)

    # ---- directive builders ----

    def item(
            self,
            data: Any,
            transformer: Any = None,
            *,
            variant: str | None = None,
            meta: Mapping[str, Any] | None = None) -> ItemResource:
        """
        Resolve `data` as a single nested resource.

        Args:
            data (Any): The nested resource. None resolves to None.
            transformer (Any): A transformer class, instance or import string, or a
                plain function mapping the resource to its output. None passes the
                data through unchanged.
            variant (str | None): Optional transform variant.
            meta (Mapping[str, Any] | None): Optional metadata for the serializer.
        """
        return ItemResource(data=data, transformer=transformer, variant=variant, meta=meta)

    def collection(
            self,
            data: Any,
            transformer: Any = None,
            *,
            variant: str | None = None,
            meta: Mapping[str, Any] | None = None,
            pagination: Pagination | None = None) -> CollectionResource:
        """
        Resolve every element of `data`, in order, with the same transformer.
        """
        return CollectionResource(
            data=data, transformer=transformer, variant=variant, meta=meta, pagination=pagination)

    def null(self) -> NullResource:
        return NullResource()

    # ---- ambient state of the running resolution ----

    @property
    def current_scope(self) -> ResolutionScope | None:
        return current_resolution_scope.get(None)

    @property
    def context(self) -> Any:
        """
        The context bound to the running transformation, or None.
        """
        scope = current_resolution_scope.get(None)
        return scope.context if scope is not None else None
