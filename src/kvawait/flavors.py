"""
Descriptions of the callback-based client libraries ``wrap`` understands.

A ``Flavor`` binds a library object to the nominal types of its clients and
transaction builders and to the attribute names of its distinguished
operations. Flavors are registered process-wide so that ``wrap`` can
recognize any registered library, not only a single known one.
"""

from __future__ import annotations

import typing as t

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from kvawait.catalog import COMMANDS, CommandCatalog

log = structlog.get_logger(__name__)

TargetKind = t.Literal["library", "client", "transaction"]

_NonEmptyName = t.Annotated[str, Field(min_length=1)]


class Flavor(BaseModel):
    """
    Shape of a callback-based key-value client library.

    Attributes
    ----------
    library : typing.Any
        Library or factory object, usually a module.
    client_type : type
        Class of connected clients.
    transaction_types : tuple[type, ...]
        Classes of transaction builders (e.g. ``Multi`` and ``Batch``).
    create_client_attr : str
        Name of the client-construction function on the library.
    duplicate_attr : str
        Name of the clone operation on a client.
    transaction_attrs : tuple[str, ...]
        Names of the transaction-builder accessors on a client.
    execute_attr : str
        Name of the execute method on a transaction builder.
    catalog : CommandCatalog
        Names of client attributes that are remote commands.
    name : str | None
        Display name, defaults to the client type name.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    library: t.Any
    client_type: type
    transaction_types: tuple[type, ...] = Field(min_length=1)
    create_client_attr: _NonEmptyName = "create_client"
    duplicate_attr: _NonEmptyName = "duplicate"
    transaction_attrs: tuple[_NonEmptyName, ...] = Field(default=("multi", "batch"), min_length=1)
    execute_attr: _NonEmptyName = "exec"
    catalog: CommandCatalog = Field(default_factory=lambda: COMMANDS)
    name: str | None = None

    @field_validator("transaction_attrs")
    @classmethod
    def check_unique_transaction_attrs(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if len(set(value)) != len(value):
            raise ValueError("transaction accessor names must be unique")
        return value

    @model_validator(mode="after")
    def default_name(self) -> "Flavor":
        if self.name is None:
            # frozen model: bypass __setattr__ once during validation
            object.__setattr__(self, "name", self.client_type.__name__)
        return self

    def kind_of(self, target: t.Any) -> TargetKind | None:
        """
        Classify a target against this flavor.

        Parameters
        ----------
        target : typing.Any
            Object to classify.

        Returns
        -------
        TargetKind | None
            ``"library"``, ``"client"`` or ``"transaction"``, or ``None`` when
            the target belongs to another library.
        """
        if target is self.library:
            return "library"
        if isinstance(target, self.client_type):
            return "client"
        if isinstance(target, self.transaction_types):
            return "transaction"
        return None


_FLAVORS: list[Flavor] = []


def register_flavor(flavor: Flavor) -> Flavor:
    """
    Register a flavor, replacing any previous flavor for the same library.

    Parameters
    ----------
    flavor : Flavor
        Flavor to register.

    Returns
    -------
    Flavor
        The registered flavor.
    """
    _FLAVORS[:] = [known for known in _FLAVORS if known.library is not flavor.library]
    _FLAVORS.append(flavor)
    log.debug(event="Registered flavor", flavor=flavor.name)
    return flavor


def unregister_flavor(library: t.Any) -> None:
    """
    Forget the flavor registered for a library, if any.

    Parameters
    ----------
    library : typing.Any
        Library object whose flavor should be removed.
    """
    _FLAVORS[:] = [known for known in _FLAVORS if known.library is not library]


def get_flavors() -> tuple[Flavor, ...]:
    """
    Return registered flavors in registration order.

    Returns
    -------
    tuple[Flavor, ...]
        Registered flavors.
    """
    return tuple(_FLAVORS)


def find_flavor(target: t.Any) -> Flavor | None:
    """
    Resolve the registered flavor a target belongs to.

    Parameters
    ----------
    target : typing.Any
        Library, client or transaction builder.

    Returns
    -------
    Flavor | None
        Matching flavor, or ``None`` when no registered flavor claims it.
    """
    for flavor in _FLAVORS:
        if flavor.kind_of(target=target) is not None:
            return flavor
    return None
