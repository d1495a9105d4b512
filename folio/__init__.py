"""
FOLIO - Facade Over Layered Interchangeable Output

A rendering facade for a multi-tenant theming platform. Wraps Jinja2 to register
theme partials, expose helper functions to templates, decorate rendered output,
and report a typed error for every failure phase.

Architecture:
- Rendering Context: template store, precompiled artifacts, render pipeline, decorators
- Helpers Context: helper registration contract, shared helper context, helper library
"""

__version__ = "0.1.0"
