from typing import Annotated

from pydantic import Field

from devsignal.models.developer import Provider

GITHUB_USERNAME = Annotated[str, Field(description="The GitHub login of the developer.")]
GITLAB_USERNAME = Annotated[str, Field(description="The GitLab username of the developer.")]

SYMBOL = Annotated[str, Field(description="The ticker symbol of the stock, e.g. AAPL.")]

PROVIDER = Annotated[Provider, Field(description="The code hosting provider of the project.")]
PROJECT = Annotated[str, Field(description="The repository name on GitHub, or the numeric project id on GitLab.")]
OWNER = Annotated[str | None, Field(description="The owner of the GitHub repository. Not used for GitLab projects.")]
