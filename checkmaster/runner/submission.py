"""Turn a validated checklist run into an immutable submission record."""
from __future__ import annotations

import copy
import logging
from typing import Mapping, Optional

from checkmaster.core.models import THUMBNAIL_KEY, AnswerValue, Submission, Template
from checkmaster.core.utils import new_id, now_ms

logger = logging.getLogger(__name__)


def finalize(
    template: Template,
    answers: Mapping[str, AnswerValue],
    total: float,
    timestamp: Optional[int] = None,
) -> Submission:
    """Build the submission for ``template`` from a copy of ``answers``.

    Callers must have validated the answers first. The template name is
    snapshotted so later template edits do not rewrite history.
    """

    data = copy.deepcopy(dict(answers))
    thumbnail = data.get(THUMBNAIL_KEY)
    submission = Submission(
        id=new_id(),
        template_id=template.id,
        template_name=template.name,
        data=data,
        total_value=total,
        date=timestamp if timestamp is not None else now_ms(),
        thumbnail=thumbnail if isinstance(thumbnail, str) and thumbnail else None,
    )
    logger.info(
        "Finalized submission %s for template %s (total %.2f)",
        submission.id,
        template.name,
        total,
    )
    return submission
