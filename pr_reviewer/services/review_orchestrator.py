"""
Review Orchestrator component.

Runs the per-file pipeline (prompt, model call, interpretation, anchoring)
over every filtered file record and collects the resulting anchors for a
single batched review.
"""

import asyncio
from typing import List, Sequence

from pr_reviewer.models.comment import CommentAnchor
from pr_reviewer.models.diff import FileDiffRecord
from pr_reviewer.models.pr_event import ChangeRequestMetadata
from pr_reviewer.review.anchor_mapper import AnchorPolicy, to_anchors
from pr_reviewer.review.prompt_builder import build_prompt
from pr_reviewer.review.response_interpreter import interpret
from pr_reviewer.services.llm_client import LLMClient
from pr_reviewer.utils.logging import get_logger

logger = get_logger(__name__)


class ReviewOrchestrator:
    """Reviews file records independently and merges their comment anchors."""

    def __init__(
        self,
        llm_client: LLMClient,
        anchor_policy: AnchorPolicy = AnchorPolicy.DROP,
        max_concurrency: int = 4,
    ):
        """
        Initialize the orchestrator.

        Args:
            llm_client: Inference collaborator
            anchor_policy: Handling of findings outside the visible hunks
            max_concurrency: Upper bound on in-flight model calls
        """
        self.llm_client = llm_client
        self.anchor_policy = anchor_policy
        self.max_concurrency = max(1, max_concurrency)

    async def run(
        self,
        records: Sequence[FileDiffRecord],
        metadata: ChangeRequestMetadata,
    ) -> List[CommentAnchor]:
        """
        Review all records and return every anchor produced.

        A file whose model call or reply fails contributes no anchors; the
        other files are unaffected. Anchor order carries no meaning.

        Args:
            records: Filtered file records
            metadata: Pull request title and description

        Returns:
            Accumulated anchors for one batched post
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _bounded(record: FileDiffRecord) -> List[CommentAnchor]:
            async with semaphore:
                return await self.review_file(record, metadata)

        logger.info(f"Reviewing {len(records)} files (max_concurrency={self.max_concurrency})")
        results = await asyncio.gather(*(_bounded(record) for record in records))

        anchors = [anchor for batch in results for anchor in batch]
        logger.info(f"Collected {len(anchors)} comments from {len(records)} files")
        return anchors

    async def review_file(
        self,
        record: FileDiffRecord,
        metadata: ChangeRequestMetadata,
    ) -> List[CommentAnchor]:
        """
        Run the review pipeline for one file.

        Args:
            record: File diff to review
            metadata: Pull request title and description

        Returns:
            Anchors for this file, empty when the model call or reply failed
        """
        file_logger = logger.with_context(file_path=record.target_path)
        prompt = build_prompt(record, metadata)

        try:
            reply = await self.llm_client.complete(prompt)
        except Exception as e:
            file_logger.error(f"Model call failed, skipping file: {e}", exc_info=True)
            return []

        findings = interpret(reply)
        if findings is None:
            file_logger.warning("Model reply could not be interpreted, skipping file")
            return []

        anchors = to_anchors(record, findings, self.anchor_policy)
        file_logger.info(f"Produced {len(anchors)} of {len(findings)} findings as comments")
        return anchors
