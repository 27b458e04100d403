"""
gitlab-smoke: obtain a GitLab Personal Access Token and smoke-test the GitLab API with it.

The token is created by logging in to the web UI as root and submitting the
personal access token form. It is saved to a local file and, when configured,
mirrored to Bitwarden Secrets Manager for later runs.

Environment:
    NETWORK, ENVIRONMENT, SERVICE - parts of the secret name (default: local, dev, gitlab)
    BWS_ACCESS_TOKEN              - Bitwarden Secrets access token (optional)
    BWS_PROJECT_ID                - Bitwarden Secrets project (optional)
    GITLAB_URL                    - GitLab instance URL (default: http://localhost)
"""

from gitlab_smoke.cli import main

__version__ = "0.1.0"
__all__ = ["main", "__version__"]
