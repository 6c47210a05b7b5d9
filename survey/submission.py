"""Assembling the payload handed to the submission layer."""
import logging

from shared.schema import Submission, SubmissionFloorplan, FloorplanSize
from shared.status import Status, aggregate_status

logger = logging.getLogger(__name__)


class SubmissionBlocked(Exception):
    """The project is not ready to be submitted."""


def blocking_reasons(name: str, editor, overlay) -> list[str]:
    """Everything that currently prevents a submission; empty when ready."""
    reasons = []
    if not name or not name.strip():
        reasons.append("project name is empty")
    if editor.status is not Status.OK:
        reasons.append(f"floorplan status is {editor.status.name}")
    if overlay.geo_anchors is None or len(overlay.local_anchors) != 3:
        reasons.append("floorplan is not placed on the map")
    elif overlay.status is not Status.OK:
        reasons.append(f"map status is {overlay.status.name}")
    return reasons


def can_submit(name: str, editor, overlay) -> bool:
    return not blocking_reasons(name, editor, overlay)


def build_submission(name: str, editor, overlay, image_data: str) -> Submission:
    """Payload {name, floorplan{height, width, data}, structure, walls, anchors}.

    Raises SubmissionBlocked while the name is missing, any component
    status is not OK, or the overlay has no placement.
    """
    reasons = blocking_reasons(name, editor, overlay)
    if reasons:
        raise SubmissionBlocked("; ".join(reasons))
    document = editor.to_document()
    size: FloorplanSize = document.floorplan
    submission = Submission(
        name=name.strip(),
        floorplan=SubmissionFloorplan(height=size.height, width=size.width, data=image_data),
        structure=document.structure,
        walls=document.walls,
        anchors=overlay.anchor_payload(),
    )
    logger.info("Submission %r ready: %d boundaries, %d walls, status %s",
                submission.name, len(submission.structure), len(submission.walls),
                aggregate_status([editor.status, overlay.status]).name)
    return submission
