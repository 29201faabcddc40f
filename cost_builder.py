from typing import Iterator, Sequence, Tuple

import numpy as np

import seam_utils.logging as logging
from data_structures import CostMatrix, Image
from exceptions import InvalidInputError
from seam_utils.decorators import log_and_time

logger = logging.getLogger(__name__)


def seam_cost(left: Image, right: Image) -> int:
    """
    Cost of placing `right` directly after `left`: the summed absolute channel
    difference between the last column of `left` and the first column of `right`.
    """
    diff = np.abs(left.right_edge - right.left_edge)
    return int(diff.sum())


@log_and_time("build_cost_matrix", error_cls=InvalidInputError)
def build_cost_matrix(images: Sequence[Image]) -> CostMatrix:
    logger.info("CHECKPOINT: build_cost_matrix start...")

    n = len(images)
    if n < 1:
        raise InvalidInputError("At least one image is required")

    height, width = images[0].shape
    for idx, img in enumerate(images, start=1):
        if img.height < 1 or img.width < 1:
            raise InvalidInputError(f"Image {idx} is empty")
        if img.shape != (height, width):
            raise InvalidInputError(
                f"Image {idx} is {img.height}x{img.width}, expected {height}x{width}"
            )

    # (n, height, 3) seams; row i of `dist` holds cost[i+1][*] over the real nodes
    rights = np.stack([img.right_edge for img in images])
    lefts = np.stack([img.left_edge for img in images])

    values = np.zeros((n + 1, n + 1), dtype=np.int64)
    for i in range(n):
        dist = np.abs(rights[i][None, :, :] - lefts).sum(axis=(1, 2))
        values[i + 1, 1:] = dist
    np.fill_diagonal(values, 0)

    cost = CostMatrix(values)
    logger.info("CHECKPOINT: build_cost_matrix done. nodes=%d (incl. depot), image=%dx%d", cost.size, height, width)
    if logger.isEnabledFor(logging.DEBUG):
        for i, j, forward, backward in pairwise_costs(cost):
            logger.debug("Distance between image %d and %d is %d, reverse is %d", i, j, forward, backward)
    return cost


def pairwise_costs(cost: CostMatrix) -> Iterator[Tuple[int, int, int, int]]:
    """Yield (i, j, cost[i][j], cost[j][i]) for every unordered pair of real nodes."""
    for i in range(1, cost.size - 1):
        for j in range(i + 1, cost.size):
            yield i, j, cost[i, j], cost[j, i]
