"""MEL command strings sent to the command port.

Every string interpolated into a command goes through :func:`escape`, and
every host path through :func:`remote_path`.
"""

import sys
from pathlib import Path

ECHO_ON = "commandEcho -state on -lineNumbers on;"
ECHO_OFF = "commandEcho -state off -lineNumbers off;"
CLOSE_ALL_OUTPUTS = "cmdFileOutput -ca;"
END_OF_RUN = 'print "\\n";'

FILE_REFERENCE_MARKER = "Mel procedure found in"

QUERY_KEYWORD_VAR = "$mayasend_keyword"
QUERY_RESULT_VAR = "$mayasend_whatis"


def escape(value: str) -> str:
    """Escape a value for a double-quoted MEL (or Python) string literal."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def remote_path(path: str | Path) -> str:
    """Render a host path the way the remote process expects it."""
    path = str(path)
    if sys.platform == "win32":
        path = path.replace("\\", "/")
    return path


def _quoted_path(path: str | Path) -> str:
    return f'"{escape(remote_path(path))}"'


def redirect_output(path: str | Path) -> str:
    return f"cmdFileOutput -o {_quoted_path(path)};"


def source_file(path: str | Path) -> str:
    return f"source {_quoted_path(path)};"


def python_exec_file(path: str | Path, form: str = "exec") -> str:
    """Evaluate a Python file through MEL's ``python`` command.

    ``exec`` reads the file text and executes it, which works on every
    Python 3 build. ``execfile`` is the historical form for Python 2 builds.
    """
    if form == "execfile":
        code = f"execfile({_quoted_path(path)})"
    else:
        code = f"exec(open({_quoted_path(path)}).read())"
    return f'python("{escape(code)}");'


def delete_file(path: str | Path) -> str:
    return f"sysFile -delete {_quoted_path(path)};"


def assign_string(variable: str, value: str) -> str:
    return f'string {variable} = "{escape(value)}";'


def whatis(variable: str, result_variable: str) -> str:
    return f"string {result_variable} = `whatIs {variable}`;"


def print_tagged(tag: str, result_variable: str) -> str:
    return f'print ("{escape(tag)}:" + {result_variable});'


def query_script(keyword: str) -> str:
    """The three MEL statements answering ``<keyword>:<whatIs result>``."""
    return "\n".join(
        [
            assign_string(QUERY_KEYWORD_VAR, keyword),
            whatis(QUERY_KEYWORD_VAR, QUERY_RESULT_VAR),
            print_tagged(keyword, QUERY_RESULT_VAR),
        ]
    )
