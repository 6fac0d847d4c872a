"""
Record Console: a generic list-view engine for administrative screens.

This package provides the machinery shared by every record screen of the
console (leads, units, companies, ...): query state, the filter/sort/paginate
pipeline, cross-page selection, reason-gated CSV export and the
mutation-refresh protocol, plus a Reflex UI that drives one engine per screen.

Subpackages:
- engine: Pipeline, selection, export and mutation-refresh logic
- models: Query descriptor, record configuration and outcome models
- services: Record service, audit log and notification collaborators
- components: Reflex UI components
- data: Demo fixtures

Main entry points:
- engine.ListView: One list engine per screen
- app.main(): Start the development server
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
