"""pagegen -- generates Next.js list pages with shadcn/ui from a configuration.

Quick usage::

    from pagegen.config import Settings
    from pagegen.pipeline import GenerationPipeline

    pipeline = GenerationPipeline(Settings(project_root="./web"))
    result = await pipeline.run({"pageName": "Users", ...})
"""

__version__ = "0.1.0"
