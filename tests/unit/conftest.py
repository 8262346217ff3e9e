"""Shared fixtures for unit tests."""

import pytest

from pr_reviewer.models import ChangeRequestMetadata, FileDiffRecord

APP_DIFF = (
    "diff --git a/src/app.ts b/src/app.ts\n"
    "index 83db48f..bf269f4 100644\n"
    "--- a/src/app.ts\n"
    "+++ b/src/app.ts\n"
    "@@ -40,4 +40,5 @@ export function start() {\n"
    "   const port = 3000;\n"
    "-  listen(port);\n"
    "+  const host = '0.0.0.0';\n"
    "+  listen(port, host);\n"
    "   return port;\n"
    " }\n"
)

README_DIFF = (
    "diff --git a/docs/readme.md b/docs/readme.md\n"
    "index 1111111..2222222 100644\n"
    "--- a/docs/readme.md\n"
    "+++ b/docs/readme.md\n"
    "@@ -1 +1 @@\n"
    "-# Title\n"
    "+# New title\n"
)

DELETED_DIFF = (
    "diff --git a/old.py b/old.py\n"
    "deleted file mode 100644\n"
    "index 3333333..0000000\n"
    "--- a/old.py\n"
    "+++ /dev/null\n"
    "@@ -1,2 +0,0 @@\n"
    "-import os\n"
    "-print(os.getcwd())\n"
)


@pytest.fixture
def app_record():
    """Record for src/app.ts covering new lines 40-44 and old lines 40-43."""
    return FileDiffRecord(source_path="src/app.ts", target_path="src/app.ts", body=APP_DIFF)


@pytest.fixture
def deleted_record():
    return FileDiffRecord(source_path="old.py", target_path="/dev/null", body=DELETED_DIFF)


@pytest.fixture
def metadata():
    return ChangeRequestMetadata(
        owner="octo",
        repo_name="demo",
        request_number=7,
        title="Bind server to all interfaces",
        description="Needed for the container setup.",
    )


@pytest.fixture
def app_diff():
    return APP_DIFF


@pytest.fixture
def readme_diff():
    return README_DIFF


@pytest.fixture
def deleted_diff():
    return DELETED_DIFF
