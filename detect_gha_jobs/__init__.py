"""
detect-gha-jobs: list the jobs declared in GitHub Actions workflow files.
"""

__version__ = "0.1.0"
