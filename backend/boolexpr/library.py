"""
Expression libraries.

Named expressions kept in YAML so that applications can ship and select
filters by id rather than embedding expression text in code::

    library:
      name: source-files
      version: 1.0.0
      description: Filters used by the indexer
    expressions:
      - id: python
        expression: re='\\.py$' && !re=_test
        description: Python sources without tests
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError
from .expression import Expression
from .parser import Parser

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"^[a-z][a-z0-9_-]*$")
_SEMVER_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")


class ExpressionDefinition(BaseModel):
    """A single named expression."""

    id: str
    expression: str
    description: str = ""

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not _ID_PATTERN.match(v):
            raise ValueError(
                f"expression id '{v}' must be lowercase kebab-case or snake_case"
            )
        return v


class ExpressionLibrary(BaseModel):
    """A named, versioned collection of expressions."""

    name: str = Field(min_length=1)
    version: str = "1.0.0"
    description: str = ""
    expressions: List[ExpressionDefinition] = Field(default_factory=list)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        if not _SEMVER_PATTERN.match(v):
            raise ValueError(f"version '{v}' must be semver (e.g. 1.0.0)")
        return v

    @model_validator(mode="after")
    def check_unique_ids(self) -> "ExpressionLibrary":
        seen = set()
        for definition in self.expressions:
            if definition.id in seen:
                raise ValueError(f"duplicate expression id: {definition.id}")
            seen.add(definition.id)
        return self

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "ExpressionLibrary":
        """Load a library from YAML content."""
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError("expression library must be a YAML mapping")

        library_data = data.get("library") or {}
        if not isinstance(library_data, dict):
            raise ConfigError("library section must be a YAML mapping")

        try:
            return cls(
                name=library_data.get("name", ""),
                version=str(library_data.get("version", "1.0.0")),
                description=library_data.get("description", ""),
                expressions=data.get("expressions") or [],
            )
        except ValidationError as e:
            raise ConfigError(f"invalid expression library: {e}") from e

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ExpressionLibrary":
        """Load a library from a file."""
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"File not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_yaml(f.read())

    def get(self, expression_id: str) -> Optional[ExpressionDefinition]:
        """Return the definition with the given id, if any."""
        for definition in self.expressions:
            if definition.id == expression_id:
                return definition
        return None

    def compile(self, parser: Parser) -> Dict[str, Expression]:
        """
        Parse every expression in the library.

        Args:
            parser: Parser with the operands the expressions use registered.

        Returns:
            Dictionary of expression id to Expression.

        Raises:
            ConfigError: Naming the first expression that fails to parse.
        """
        compiled: Dict[str, Expression] = {}
        for definition in self.expressions:
            try:
                compiled[definition.id] = parser.parse(definition.expression)
            except Exception as e:
                raise ConfigError(f"{definition.id}: {e}") from e
        logger.debug(
            "compiled %d expressions from library %s %s",
            len(compiled), self.name, self.version,
        )
        return compiled
