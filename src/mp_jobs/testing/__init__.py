"""Testing support – fakes, pytest fixtures and Hypothesis strategies.

Import in your ``conftest.py``::

    pytest_plugins = ["mp_jobs.testing.fixtures"]
"""

from mp_jobs.testing.fakes import FailingJobStorage, FakeClock

__all__ = ["FailingJobStorage", "FakeClock"]
