"""
Command-line interface module.

This module provides a rich terminal interface for descriptor-schema using Typer and Rich.

Commands:
    - schema: Print the JSON Schema of a descriptor file or Pydantic model
    - validate: Validate a JSON document against that schema

Example Usage:
    ```bash
    # Schema from a descriptor document
    descriptor-schema schema --descriptor user.descriptor.json

    # Schema from a Pydantic model, keeping a top-level "| undefined"
    descriptor-schema schema --model app.models:User --keep-undefined

    # Fail on shapes JSON Schema can't express
    descriptor-schema schema --descriptor user.descriptor.json --strict --output user.schema.json

    # Validate a document
    descriptor-schema validate --json user.json --descriptor user.descriptor.json
    ```
"""

from .main import app

__all__ = ["app"]
