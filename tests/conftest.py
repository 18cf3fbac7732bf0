pytest_plugins = ["mp_jobs.testing.fixtures"]
