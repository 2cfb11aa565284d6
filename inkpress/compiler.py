"""Compilation of handlebars theme files into helper trees."""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from pathlib import Path
from typing import Iterator, MutableMapping, Optional, Union

from inkpress.models import Helper
from inkpress.registry import resolve_helper

log = logging.getLogger(__name__)

DEFAULT_THEME = "promenade"
TEMPLATE_EXTENSION = ".hbs"
REQUIRED_TEMPLATES = ("index", "post")
BUILTIN_TEMPLATES = ("pagination", "navigation")

_OPEN_TAG = "{{"
_CLOSE_TAG = "}}"
_UNESCAPED_CLOSE_TAG = "}}}"
_TWO_PART_ARGUMENT = re.compile(r"""(\S+?)\s*?=\s*?['"](.*?)['"]""")
_QUOTED = re.compile(r"""(.*?)["'](.+?)["']$""")

PathLike = Union[str, Path]


class ThemeError(Exception):
    """Raised when a theme or template cannot be compiled."""


def _make_helper(
    name: str,
    unescaped: bool,
    position: int = 0,
    block: str = "",
    children: Optional[list[Helper]] = None,
) -> Helper:
    return Helper(
        name=name,
        unescaped=unescaped,
        position=position,
        block=block,
        children=list(children or []),
        function=resolve_helper(name),
    )


def _unquote(word: str) -> str:
    match = _QUOTED.search(word)
    return match.group(2) if match else word


def _create_helper(
    helper_name: str,
    unescaped: bool,
    position: int,
    block: str,
    children: list[Helper],
    else_helper: Optional[Helper] = None,
) -> Helper:
    matches = list(_TWO_PART_ARGUMENT.finditer(helper_name))
    two_part = [f"{match.group(1)}={match.group(2)}" for match in matches]
    for match in matches:
        helper_name = helper_name.replace(match.group(0), "", 1)

    words = helper_name.split()
    if not words:
        raise ThemeError("Empty helper name in template.")
    helper = _make_helper(_unquote(words[0]), unescaped, position, block, children)
    helper.arguments.extend(_make_helper(_unquote(word), unescaped) for word in words[1:])
    for argument in two_part:
        match = _QUOTED.search(argument)
        if match:
            argument = match.group(1) + match.group(2)
        helper.arguments.append(_make_helper(argument, unescaped))
    if else_helper is not None:
        helper.arguments.append(else_helper)
    return helper


def _find_helpers(data: str) -> tuple[str, list[Helper]]:
    """Strip all helper tags from data, returning the remaining text and the helpers."""
    helpers: list[Helper] = []
    while True:
        start = data.find(_OPEN_TAG)
        if start == -1:
            break
        open_length = len(_OPEN_TAG)
        close_tag = _CLOSE_TAG
        unescaped = False
        if start + open_length < len(data) and data[start + open_length] == "{":
            unescaped = True
            open_length += 1
            close_tag = _UNESCAPED_CLOSE_TAG
        end = data.find(close_tag, start + open_length)
        if end == -1:
            break
        name = data[start + open_length : end]
        if unescaped and name.startswith("{"):
            name = name[1:]
        name = name.strip(" ")
        data = data[:start] + data[end + len(close_tag) :]
        if name.startswith(("! ", "!--")):
            continue
        if name.startswith("#"):
            data, helper = _find_block(data, name[1:], unescaped, start)
        else:
            helper = _create_helper(name, unescaped, start, "", [])
        helpers.append(helper)
    return data, helpers


def _find_block(
    data: str, helper_name: str, unescaped: bool, start: int
) -> tuple[str, Helper]:
    words = helper_name.split()
    if not words:
        raise ThemeError("Empty block helper name in template.")
    tag = re.escape(words[0])
    close_pattern = re.compile(r"\{{2,3}\s*/" + tag + r".?\}{2,3}")
    open_pattern = re.compile(r"\{{2,3}\s*#" + tag + r".+?\}{2,3}")
    closes = [match.span() for match in close_pattern.finditer(data)]
    unbalanced = ThemeError(f"Block helper '{words[0]}' is not closed.")
    if not closes:
        raise unbalanced
    # Skip over closing tags that belong to nested blocks of the same kind.
    index = 0
    for opening in open_pattern.finditer(data):
        if index >= len(closes):
            raise unbalanced
        if opening.start() < closes[index][0]:
            index += 1
    if index >= len(closes):
        raise unbalanced
    close_start, close_end = closes[index]
    block = data[start:close_start]
    data = data[:start] + data[close_end:]
    block, children = _find_helpers(block)
    for position, child in enumerate(children):
        if child.name == "else":
            else_children = [
                replace(grandchild, position=grandchild.position - child.position)
                for grandchild in children[position + 1 :]
            ]
            else_helper = replace(
                child, block=block[child.position :], children=else_children
            )
            helper = _create_helper(
                helper_name,
                unescaped,
                start,
                block[: child.position],
                children[:position],
                else_helper,
            )
            return data, helper
    return data, _create_helper(helper_name, unescaped, start, block, children)


def compile_template(data: str, name: str) -> Helper:
    """Compile template text into a helper tree named after the template."""
    block, children = _find_helpers(data)
    base = Helper(name=name, block=block, children=children, function=resolve_helper(name))
    for child in children:
        if child.name == "body":
            base.body_helper = child
    return base


def _compile_file(path: Path, templates: MutableMapping[str, Helper]) -> None:
    try:
        data = path.read_bytes().decode("utf-8", errors="replace")
    except OSError as error:
        raise ThemeError(f"Couldn't read template {path}: {error}") from error
    name = path.stem
    if name in templates:
        raise ThemeError(
            f"Error: Conflicting .hbs name '{name}'. A theme file of the same name already exists."
        )
    templates[name] = compile_template(data, name)


def _theme_files(directory: Path) -> Iterator[Path]:
    if not directory.is_dir():
        return
    for entry in sorted(directory.iterdir(), key=lambda path: path.name):
        if entry.is_dir():
            yield from _theme_files(entry)
        elif entry.suffix == TEMPLATE_EXTENSION:
            yield entry


def compile_theme(
    theme_path: PathLike, builtin_dir: Optional[PathLike] = None
) -> dict[str, Helper]:
    """Compile every .hbs file of a theme.

    Pagination and navigation templates missing from the theme are taken from
    builtin_dir when possible.
    """
    theme = Path(theme_path)
    if not theme.exists():
        raise ThemeError(f"Couldn't find theme files in {theme}")
    templates: dict[str, Helper] = {}
    for path in _theme_files(theme):
        _compile_file(path, templates)
    for required in REQUIRED_TEMPLATES:
        if required not in templates:
            raise ThemeError(
                f"Couldn't compile template '{required}'. Is {required}.hbs missing?"
            )
    for fallback in BUILTIN_TEMPLATES:
        if fallback in templates:
            continue
        try:
            if builtin_dir is None:
                raise ThemeError("no built-in template directory")
            _compile_file(Path(builtin_dir) / f"{fallback}{TEMPLATE_EXTENSION}", templates)
        except ThemeError as error:
            log.warning("Couldn't compile %s template: %s", fallback, error)
    return templates


def list_themes(themes_dir: PathLike) -> list[str]:
    """Names of the theme directories, sorted."""
    directory = Path(themes_dir)
    if not directory.is_dir():
        return []
    return sorted(entry.name for entry in directory.iterdir() if entry.is_dir())


def load_theme(
    themes_dir: PathLike, active_theme: str, builtin_dir: Optional[PathLike] = None
) -> tuple[str, dict[str, Helper]]:
    """Compile the active theme, falling back to the default and then any theme.

    Returns the name of the theme that was used together with its templates.
    """
    candidates = dict.fromkeys([active_theme, DEFAULT_THEME, *list_themes(themes_dir)])
    for name in candidates:
        try:
            templates = compile_theme(Path(themes_dir) / name, builtin_dir)
        except ThemeError as error:
            log.info("Theme '%s' not usable: %s", name, error)
            continue
        return name, templates
    raise ThemeError(f"Couldn't find a theme to use in {themes_dir}")