"""
ukforge.templating - Packaged Template Set
==========================================

The library skeleton is produced from a fixed set of Jinja2 templates that
ship inside the ``ukforge.templates`` package. They are read once, on first
use, into a read-only registry; nothing rewrites them at runtime.

Template Registry
-----------------
    CODING_STYLE.md.j2  -> CODING_STYLE.md
    Config.uk.j2        -> Config.uk
    CONTRIBUTING.md.j2  -> CONTRIBUTING.md
    COPYING.md.j2       -> COPYING.md
    README.md.j2        -> README.md
    Makefile.uk.j2      -> Makefile.uk
    main.c.j2           -> main.c          (provide_main)
    docs_index.md.j2    -> docs/index.md   (with_docs)

Template Context
----------------
    config          : LibraryConfig
    year            : int, current year
    commit          : str, the initial commit message
    ukforge_version : str

Templates are rendered with ``StrictUndefined``: referencing a name that is
not in the context, or an attribute that the record does not have, raises
:class:`ukforge.errors.TemplateRenderError` instead of rendering blank text.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from functools import cache
from importlib import resources
from types import MappingProxyType
from typing import Any

import jinja2
from jinja2 import DictLoader, Environment, StrictUndefined

from ukforge import __version__
from ukforge.errors import TemplateNotFoundError, TemplateRenderError, TemplateSyntaxError
from ukforge.models import LibraryConfig


INITIAL_COMMIT_MESSAGE = "Initial commit (blank)"

# Mandatory templates in write order: template name -> output path.
MANDATORY_TEMPLATES: Mapping[str, str] = MappingProxyType({
    "CODING_STYLE.md.j2": "CODING_STYLE.md",
    "Config.uk.j2": "Config.uk",
    "CONTRIBUTING.md.j2": "CONTRIBUTING.md",
    "COPYING.md.j2": "COPYING.md",
    "README.md.j2": "README.md",
    "Makefile.uk.j2": "Makefile.uk",
})

MAIN_TEMPLATE = "main.c.j2"
MAIN_OUTPUT = "main.c"

DOCS_TEMPLATE = "docs_index.md.j2"
DOCS_OUTPUT = "docs/index.md"

ALL_TEMPLATES: tuple[str, ...] = (*MANDATORY_TEMPLATES, MAIN_TEMPLATE, DOCS_TEMPLATE)


# =============================================================================
# Registry
# =============================================================================

@cache
def load_template_sources() -> Mapping[str, str]:
    """
    Read every packaged template into a read-only mapping.

    The result is cached, so the files are read at most once per process.

    Returns
    -------
    Mapping[str, str]
        Template name to template source text.
    """
    package = resources.files("ukforge.templates")
    return MappingProxyType({
        name: package.joinpath(name).read_text(encoding="utf-8")
        for name in ALL_TEMPLATES
    })


def build_context(config: LibraryConfig, *, year: int | None = None) -> dict[str, Any]:
    """
    Build the render context for a configuration.

    The year and commit message are only computed here, at render time.
    """
    return {
        "config": config,
        "year": year if year is not None else datetime.now(UTC).year,
        "commit": INITIAL_COMMIT_MESSAGE,
        "ukforge_version": __version__,
    }


# =============================================================================
# Template Set
# =============================================================================

class TemplateSet:
    """
    Parses and renders the library templates.

    Parameters
    ----------
    sources : Mapping[str, str] | None
        Template sources to use instead of the packaged set. Intended for
        tests that need a malformed or incomplete template.

    Examples
    --------
    >>> templates = TemplateSet()
    >>> readme = templates.parse("README.md.j2")
    >>> text = templates.render(readme, config)
    """

    def __init__(self, sources: Mapping[str, str] | None = None) -> None:
        self.sources = sources if sources is not None else load_template_sources()
        self.env = create_jinja_env(self.sources)

    def parse(self, name: str) -> jinja2.Template:
        """
        Compile a template by name.

        Raises
        ------
        TemplateNotFoundError
            If ``name`` is not part of the set.
        TemplateSyntaxError
            If the template source is malformed.
        """
        try:
            return self.env.get_template(name)
        except jinja2.TemplateNotFound as e:
            raise TemplateNotFoundError(f"Unknown template '{name}'", name) from e
        except jinja2.TemplateSyntaxError as e:
            raise TemplateSyntaxError(
                f"Syntax error in template '{name}' (line {e.lineno}): {e.message}",
                name,
            ) from e

    def render(
        self,
        template: jinja2.Template,
        config: LibraryConfig,
        *,
        year: int | None = None,
    ) -> str:
        """
        Render a compiled template against the parameter record.

        Raises
        ------
        TemplateRenderError
            If the template references something absent from the context.
        """
        try:
            return template.render(**build_context(config, year=year))
        except jinja2.UndefinedError as e:
            raise TemplateRenderError(
                f"Failed to render template '{template.name}': {e.message}",
                template.name or "<string>",
            ) from e


def create_jinja_env(sources: Mapping[str, str]) -> Environment:
    """
    Create the Jinja2 environment for the given template sources.

    Autoescaping is off because the output is C, Kconfig, Makefile and
    Markdown, not HTML.
    """
    env = Environment(
        loader=DictLoader(dict(sources)),
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )

    env.filters["c_identifier"] = lambda s: s.replace("-", "_").replace(".", "_")

    return env
