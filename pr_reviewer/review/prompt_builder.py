"""
Prompt Builder.

Builds the instruction text sent to the model for one file of a pull
request. Output depends only on its inputs so identical records produce
byte-identical prompts.
"""

from pr_reviewer.models.diff import FileDiffRecord
from pr_reviewer.models.pr_event import ChangeRequestMetadata

REVIEW_INSTRUCTIONS = """Your task is to review pull requests. Instructions:
- Provide the response in following JSON format:  {"reviews": [{"lineNumber":  <line_number>, "side": "LEFT|RIGHT", "reviewComment": "<review comment>"}]}
- The "side" field should be "LEFT" for the original code and "RIGHT" for the new code.
- "lineNumber" is the line number in the original file for "LEFT" and in the new file for "RIGHT", as given by the hunk headers.
- Be pragmatic and concise. Do not be pedantic.
- If something can be improved, please suggest the improvement in the same comment.
- Do not give positive comments or compliments.
- Remember lines starting with a "+" are new lines, lines starting with "-" are removed lines and lines starting with " " are unchanged lines.
- ONLY comment on changed lines
- Provide comments and suggestions ONLY if there is something to improve, otherwise "reviews" should be an empty array.
- Write the comment in GitHub Markdown format.
- Use the given description only for the overall context and only comment the code.
- IMPORTANT: NEVER suggest adding comments or documentation to the code."""


def build_prompt(record: FileDiffRecord, metadata: ChangeRequestMetadata) -> str:
    """
    Build the review prompt for a single file diff.

    Args:
        record: File diff to review
        metadata: Pull request title and description, used as context only

    Returns:
        Complete prompt text
    """
    # Closing fence goes on its own line
    separator = "" if record.body.endswith("\n") else "\n"
    return f"""{REVIEW_INSTRUCTIONS}

Take the pull request title and description into account when writing the response.

Pull request title: {metadata.title}
Pull request description:

---
{metadata.description}
---

Git diff to review:

```diff
{record.body}{separator}```
"""
