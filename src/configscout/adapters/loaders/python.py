"""Python module loader.

Executes a config file as a Python module and returns its ``config``
attribute, e.g. a ``.toolrc.py`` containing::

    config = {"semi": False}
"""

from __future__ import annotations

import sys
import types
from typing import TYPE_CHECKING, Any

from configscout.core.exceptions import ConfigParseError


if TYPE_CHECKING:
    from pathlib import Path


CONFIG_ATTRIBUTE = "config"


def load_python(filepath: Path, content: str) -> Any:
    """Execute content as the module at filepath and return its ``config``.

    The source is compiled from content rather than re-read through the
    import system, so no bytecode is written next to the config file.

    Returns:
        The module's ``config`` value, or None when it defines none.

    Raises:
        ConfigParseError: If the module fails to compile or raises while
            executing. SyntaxErrors carry their line number.
    """
    # Generate a unique module name to avoid conflicts
    module_name = f"_configscout_{filepath.stem.replace('.', '_')}_{id(filepath)}"

    module = types.ModuleType(module_name)
    module.__file__ = str(filepath)
    sys.modules[module_name] = module

    try:
        code = compile(content, str(filepath), "exec")
        exec(code, module.__dict__)  # noqa: S102
    except SyntaxError as e:
        raise ConfigParseError(
            f"Python syntax error in {filepath}: {e.msg}",
            filepath=filepath,
            line=e.lineno,
            cause=e,
        ) from e
    except Exception as e:
        raise ConfigParseError(
            f"Error executing {filepath}: {type(e).__name__}: {e}",
            filepath=filepath,
            cause=e,
        ) from e
    finally:
        # Clean up to avoid polluting sys.modules
        sys.modules.pop(module_name, None)

    return getattr(module, CONFIG_ATTRIBUTE, None)
