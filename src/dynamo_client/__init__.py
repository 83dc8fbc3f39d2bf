from __future__ import annotations

import json
import re
from importlib.resources import files
from typing import TYPE_CHECKING, Any

from . import attribute as field
from .attribute import Attribute, PlainKind, TemplateKind, resolve_wire_value
from .builders import DeleteBuilder, GetBuilder, PutBuilder
from .command import Command, CommandState
from .config import RegionSource, ambient_region, create_boto3_config, create_dynamodb_client
from .errors import (
    DynamoClientError,
    InvalidConfigurationError,
    InvalidStateError,
    MissingRequiredVariableError,
    TemplateSyntaxError,
    ValidationError,
)
from .expression import ExpressionBuilder
from .marshalling import from_wire, to_wire
from .query import QueryBuilder
from .schema import SchemaOptions, TableSchema, to_snake_case
from .template import KeyTemplate
from .transaction import TransactionBuilder
from .update_builder import UpdateBuilder

if TYPE_CHECKING:
    from .client import DocumentClient
    from .table import Table


def _read_repo_version() -> str:
    try:
        data = json.loads(files(__package__).joinpath("version.json").read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return "0.0.0"

    version = data.get("version")
    return version if isinstance(version, str) and version else "0.0.0"


def _normalize_repo_version(repo_version: str) -> str:
    match = re.match(r"^(\d+\.\d+\.\d+)-rc\.?([0-9]+)$", repo_version)
    if match:
        return f"{match.group(1)}rc{match.group(2)}"
    return repo_version


__repo_version__ = _read_repo_version()
__version__ = _normalize_repo_version(__repo_version__)


def __getattr__(name: str) -> Any:
    if name == "Table":
        from .table import Table

        return Table
    if name == "DocumentClient":
        from .client import DocumentClient

        return DocumentClient
    raise AttributeError(name)


__all__ = [
    "Attribute",
    "Command",
    "CommandState",
    "DeleteBuilder",
    "DocumentClient",
    "DynamoClientError",
    "ExpressionBuilder",
    "GetBuilder",
    "InvalidConfigurationError",
    "InvalidStateError",
    "KeyTemplate",
    "MissingRequiredVariableError",
    "PlainKind",
    "PutBuilder",
    "QueryBuilder",
    "RegionSource",
    "SchemaOptions",
    "Table",
    "TableSchema",
    "TemplateKind",
    "TemplateSyntaxError",
    "TransactionBuilder",
    "UpdateBuilder",
    "ValidationError",
    "__repo_version__",
    "__version__",
    "ambient_region",
    "create_boto3_config",
    "create_dynamodb_client",
    "field",
    "from_wire",
    "resolve_wire_value",
    "to_snake_case",
    "to_wire",
]
