"""
Non-maximum suppression for decoded detections.

Responsibility:
    Remove duplicate detections of the same glyph, keeping the most
    confident detection of every overlapping cluster.

Constraints:
    - Only detections of the same class are compared. A digit and a
      decimal point sitting on top of each other both survive.
    - The confidence sort is stable, so equal confidences keep their
      decode (anchor) order and the result is deterministic.
"""

from typing import List

from meter_reader.detection import Detection
from meter_reader.geometry import iou


def suppress(detections: List[Detection], iou_threshold: float) -> List[Detection]:
    """Greedy same-class NMS.

    Args:
        detections: Candidate detections, in decode order.
        iou_threshold: A detection is dropped when its IoU with a more
                       confident kept detection of the same class is
                       strictly greater than this.

    Returns:
        The kept detections, sorted by confidence (descending).
    """
    ordered = sorted(detections, key=lambda d: d.confidence, reverse=True)
    kept = [True] * len(ordered)
    selected: List[Detection] = []

    for i, current in enumerate(ordered):
        if not kept[i]:
            continue

        selected.append(current)

        for j in range(i + 1, len(ordered)):
            if not kept[j] or ordered[j].class_id != current.class_id:
                continue
            if iou(current.box, ordered[j].box) > iou_threshold:
                kept[j] = False

    return selected
