"""
Unit tests for the prompt builder.
"""

from pr_reviewer.models import ChangeRequestMetadata, FileDiffRecord
from pr_reviewer.review.prompt_builder import build_prompt


def test_prompt_is_deterministic(app_record, metadata):
    assert build_prompt(app_record, metadata) == build_prompt(app_record, metadata)


def test_prompt_contains_review_contract(app_record, metadata):
    prompt = build_prompt(app_record, metadata)

    assert '{"reviews": [{"lineNumber":  <line_number>, "side": "LEFT|RIGHT", "reviewComment": "<review comment>"}]}' in prompt
    assert '"LEFT" for the original code and "RIGHT" for the new code' in prompt
    assert "ONLY comment on changed lines" in prompt
    assert "Do not give positive comments or compliments." in prompt
    assert "NEVER suggest adding comments or documentation" in prompt
    assert "GitHub Markdown" in prompt


def test_prompt_embeds_metadata_and_diff(app_record, metadata):
    prompt = build_prompt(app_record, metadata)

    assert "Pull request title: Bind server to all interfaces" in prompt
    assert "---\nNeeded for the container setup.\n---" in prompt
    assert "```diff\ndiff --git a/src/app.ts b/src/app.ts\n" in prompt
    assert prompt.rstrip().endswith("```")


def test_prompt_embeds_exactly_one_file(app_record, metadata):
    prompt = build_prompt(app_record, metadata)

    assert prompt.count("diff --git ") == 1


def test_empty_description(app_record):
    metadata = ChangeRequestMetadata(owner="o", repo_name="r", request_number=1, title="t")

    prompt = build_prompt(app_record, metadata)

    assert "Pull request description:\n\n---\n\n---" in prompt


def test_diff_body_is_embedded_verbatim(app_record, metadata):
    prompt = build_prompt(app_record, metadata)

    assert f"```diff\n{app_record.body}```\n" in prompt


def test_closing_fence_on_own_line_without_trailing_newline(metadata):
    record = FileDiffRecord(
        source_path="a.txt",
        target_path="a.txt",
        body="diff --git a/a.txt b/a.txt\n--- a/a.txt\n+++ b/a.txt\n@@ -1 +1 @@\n-a\n+b",
    )

    prompt = build_prompt(record, metadata)

    assert f"```diff\n{record.body}\n```\n" in prompt
