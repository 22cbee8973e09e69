"""Appforge: resolve and validate "add artifact to project" requests.

Typical package use:
    from appforge.create import run_create, CreateServices
    from appforge.core.models import CreateArgs

    outcome = run_create(CreateArgs(artifact="view", name="Main"), services)
    print(outcome.message)
"""

__version__ = "0.1.0"
