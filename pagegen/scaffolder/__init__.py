"""Page scaffolding: planning, rendering and writing generated files.

Key objects:
    plan_files       - Configuration -> ordered PlannedFile list
    TemplateRenderer - Jinja2 rendering of a planned file
    FileWriter       - renders and writes planned files in order
"""

from pagegen.scaffolder.planner import DDDPlanner, SimplifiedPlanner, plan_files, planner_for
from pagegen.scaffolder.templates import TemplateRenderer
from pagegen.scaffolder.writer import FilesystemFailure, FileWriter, RenderFailure, WriteConflict

__all__ = [
    # Planning
    "plan_files",
    "planner_for",
    "DDDPlanner",
    "SimplifiedPlanner",
    # Rendering
    "TemplateRenderer",
    # Writing
    "FileWriter",
    "WriteConflict",
    "FilesystemFailure",
    "RenderFailure",
]
