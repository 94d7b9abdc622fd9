"""Plant identification service and database schema visualizer."""

# Submodules are imported on demand so that the schema tools do not pull in
# the web stack and vice versa:
# from plant_identifier.extractor import extract_plant_info
# from plant_identifier.server import create_app
# from plant_identifier.schema import render_svg

__all__ = [
    "config",
    "extractor",
    "server",
    "schema",
]
