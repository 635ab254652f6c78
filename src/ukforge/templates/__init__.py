"""
ukforge.templates - Jinja2 Template Files
=========================================

This package holds the Jinja2 templates that make up a new library.
Templates use the .j2 extension and are loaded by ``ukforge.templating``.

Template Naming Convention
--------------------------
- Templates end with `.j2` extension
- Output filename = template name without `.j2`
- Exception: `docs_index.md.j2` → `docs/index.md`

Available Templates
-------------------
Always written:
    - CODING_STYLE.md.j2: Coding style guide
    - Config.uk.j2: Kconfig menu entry
    - CONTRIBUTING.md.j2: Contribution guide
    - COPYING.md.j2: License notice
    - README.md.j2: Library readme
    - Makefile.uk.j2: Build rules

Optional:
    - main.c.j2: Main source stub (provide_main)
    - docs_index.md.j2: Documentation index (with_docs)

Template Context
----------------
    config : LibraryConfig
        The parameter record

    year : int
        Current year (for the license notice)

    commit : str
        Initial commit message

    ukforge_version : str
        Version of ukforge for attribution
"""

# Templates are read by ukforge.templating.load_template_sources().
