# ============================================================================
# SOURCEFILE: driver.py
# RELPATH: bczip/src/bczip/core/driver.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Iterates file arguments, reports outcomes, aggregates results
# ============================================================================

"""
Driver.

Turns the argument list into jobs and runs them strictly in order, one at
a time, so diagnostics appear in argument order and prompts never compete
with other reads of standard input. A failing argument never stops the
arguments after it.
"""

from typing import Optional, Sequence

from bczip.core.console import Console
from bczip.core.executor import JobExecutor
from bczip.core.models import Failed, GlobalOptions, Job, Outcome, RunSummary, Success


class Driver:
    """
    Runs every job of one invocation.

    Attributes:
        executor: Performs individual jobs
        console: Where diagnostics and verbose lines go
        app_name: Prefix for every message line
    """

    def __init__(self, executor: JobExecutor, console: Optional[Console] = None, app_name: str = "bczip"):
        self.executor = executor
        self.console = console or executor.console
        self.app_name = app_name

    def run(self, arguments: Sequence[str], options: GlobalOptions) -> RunSummary:
        """
        Process ``arguments`` in order; an empty list means stdin to stdout.

        Returns:
            RunSummary with one outcome per job, in order
        """
        summary = RunSummary()
        if not arguments:
            jobs = [Job.for_stdin(options)]
        else:
            jobs = [Job.from_argument(arg, options) for arg in arguments]

        for job in jobs:
            outcome = self.executor.run(job, options)
            self.report(outcome, options)
            summary.add(outcome)
        return summary

    def report(self, outcome: Outcome, options: GlobalOptions) -> None:
        """Emit the diagnostic or verbose line for ``outcome``, unless quiet."""
        if options.quiet:
            return
        if isinstance(outcome, Failed):
            self.console.write_err(f"{self.app_name}: {outcome.message}\n")
        elif isinstance(outcome, Success) and options.verbose and outcome.destination is not None:
            self.console.write_out(
                f"{self.app_name}: '{outcome.source}'\t{outcome.ratio_percent:.1f}% "
                f"replaced with '{outcome.destination}'\n"
            )
