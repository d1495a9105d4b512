"""
Precompiled Template Artifacts

Serializes compiled Jinja2 templates to a JSON artifact and restores them.

An artifact carries the template's marshalled code object (the same representation
Jinja2's bytecode cache writes to disk) along with the compiler revision it was built
with. Restoring goes through Template.from_code, so no payload text is ever evaluated.

Artifact format:
    {
        "compiler": [5, "cb0d0d0a", "3.1.4"],
        "name": "components/header",
        "checksum": "<sha1 of code bytes>",
        "main": {"function": "<base64 marshalled code object>"}
    }

The compiler list is [bytecode revision, interpreter magic number, Jinja2 version].
All three must match the running interpreter for an artifact to be restored.
"""

import base64
import binascii
import hashlib
import json
import marshal
import re
import types
from dataclasses import dataclass
from importlib.metadata import version
from importlib.util import MAGIC_NUMBER
from typing import Any, List, Optional, Union

from jinja2 import Environment, Template
from jinja2.bccache import bc_version

# Cheap structural pre-check: a "compiler" array followed somewhere by a "main" function.
# Plain template source never matches, so raw templates skip JSON parsing entirely.
PRECOMPILED_SIGNATURE = re.compile(r'"compiler"\s*:\s*\[.*"main"\s*:\s*\{\s*"function"\s*:', re.DOTALL)


def compiler_revision() -> List[Any]:
    """Return the compiler list for the running interpreter and Jinja2 release."""
    return [bc_version, MAGIC_NUMBER.hex(), version("Jinja2")]


@dataclass
class PrecompiledTemplate:
    """
    Typed form of a serialized template artifact.

    Attributes:
        compiler: [bytecode revision, interpreter magic hex, Jinja2 version]
        code: Marshalled code object produced by Environment.compile
        name: Template name baked into the code (usually its logical path)
    """

    compiler: List[Any]
    code: bytes
    name: Optional[str] = None

    @property
    def checksum(self) -> str:
        return hashlib.sha1(self.code).hexdigest()

    def to_json(self) -> str:
        """Serialize to the artifact text format."""
        return json.dumps(
            {
                "compiler": self.compiler,
                "name": self.name,
                "checksum": self.checksum,
                "main": {"function": base64.b64encode(self.code).decode("ascii")},
            }
        )

    @classmethod
    def from_json(cls, payload: str) -> "PrecompiledTemplate":
        """
        Parse artifact text into a PrecompiledTemplate.

        Args:
            payload: Artifact text produced by to_json()

        Returns:
            Parsed artifact (not yet checked for compatibility)

        Raises:
            ValueError: If the payload is not valid JSON or does not have the artifact shape
        """
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            raise ValueError(f"Precompiled template is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ValueError("Precompiled template must be a JSON object")

        compiler = data.get("compiler")
        if not isinstance(compiler, list) or len(compiler) != 3:
            raise ValueError("Precompiled template has an invalid 'compiler' entry")

        main = data.get("main")
        if not isinstance(main, dict) or not isinstance(main.get("function"), str):
            raise ValueError("Precompiled template has an invalid 'main' entry")

        name = data.get("name")
        if name is not None and not isinstance(name, str):
            raise ValueError("Precompiled template has an invalid 'name' entry")

        try:
            code = base64.b64decode(main["function"], validate=True)
        except binascii.Error as e:
            raise ValueError(f"Precompiled template code is not valid base64: {e}") from e

        artifact = cls(compiler=compiler, code=code, name=name)

        if data.get("checksum") != artifact.checksum:
            raise ValueError("Precompiled template checksum mismatch")

        return artifact

    def check_compatible(self) -> None:
        """
        Verify the artifact was compiled by this interpreter and Jinja2 release.

        Raises:
            ValueError: If any element of the compiler list differs
        """
        expected = compiler_revision()
        if self.compiler != expected:
            raise ValueError(
                f"Template was precompiled with an incompatible compiler "
                f"(artifact: {self.compiler}, runtime: {expected}). "
                f"Please re-run the precompiler."
            )

    def load_code(self) -> types.CodeType:
        """Unmarshal the template code object."""
        code = marshal.loads(self.code)
        if not isinstance(code, types.CodeType):
            raise ValueError("Precompiled template does not contain a code object")
        return code


def is_precompiled(payload: Any) -> bool:
    """Check whether a template payload looks like a serialized artifact."""
    return isinstance(payload, str) and PRECOMPILED_SIGNATURE.search(payload) is not None


def precompile(environment: Environment, source: str, name: Optional[str] = None) -> str:
    """
    Compile template source and serialize it as an artifact.

    Args:
        environment: Jinja2 environment whose options the template is compiled with
        source: Raw template source
        name: Logical template name (used in tracebacks and error messages)

    Returns:
        Artifact text

    Raises:
        jinja2.TemplateSyntaxError: If the source does not compile
    """
    code = environment.compile(source, name=name, filename=name)
    return PrecompiledTemplate(
        compiler=compiler_revision(), code=marshal.dumps(code), name=name
    ).to_json()


def restore(environment: Environment, payload: str) -> Template:
    """
    Rebuild an executable template from artifact text.

    Raises:
        ValueError: If the artifact is malformed or was built by another compiler revision
    """
    artifact = PrecompiledTemplate.from_json(payload)
    artifact.check_compatible()
    code = artifact.load_code()
    return environment.template_class.from_code(
        environment, code, environment.make_globals(None)
    )


def try_restoring_precompiled(environment: Environment, payload: str) -> Union[str, Template]:
    """
    Restore a payload if it is an artifact; return raw source unchanged otherwise.

    Args:
        environment: Jinja2 environment to attach the restored template to
        payload: Raw template source or artifact text

    Returns:
        Restored Template, or the original payload when it is raw source
    """
    if not is_precompiled(payload):
        return payload
    return restore(environment, payload)
