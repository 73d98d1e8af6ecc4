from __future__ import annotations
from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np


class Visualizer:
    """Preview helpers (only used when --show). No implicit showing in library paths."""

    @staticmethod
    def show_before_after(
        before: Optional[np.ndarray],
        after: Optional[np.ndarray],
        title: str = "Filtered",
        figsize: Tuple[int, int] = (12, 6),
        show: bool = True,
    ) -> plt.Figure:
        """Original next to the filtered result; an empty panel stands in for a missing image."""
        fig, axes = plt.subplots(1, 2, figsize=figsize)
        panels: Sequence[Tuple[Optional[np.ndarray], str]] = (
            (before, "Original"),
            (after, title),
        )
        for ax, (img, label) in zip(axes, panels):
            if img is None:
                ax.text(0.5, 0.5, "No picture selected", ha="center", va="center",
                        transform=ax.transAxes)
            else:
                ax.imshow(img)
            ax.set_title(label)
            ax.axis("off")

        fig.tight_layout()
        if show:
            plt.show()
        return fig
