"""Request pipeline: validation, query building, execution, responses."""

from guitar_store.pipeline.faq import faq_loader, pair_faq_lines
from guitar_store.pipeline.handlers import StorePipelines, execute_read, execute_write, post_process
from guitar_store.pipeline.queries import Query
from guitar_store.pipeline.steps import Continue, Fail, Pipeline, StepResult, run_steps

__all__ = [
    "Continue",
    "Fail",
    "Pipeline",
    "Query",
    "StepResult",
    "StorePipelines",
    "execute_read",
    "execute_write",
    "faq_loader",
    "pair_faq_lines",
    "post_process",
    "run_steps",
]
