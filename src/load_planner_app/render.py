from __future__ import annotations

import os
import re
from typing import List

import matplotlib.pyplot as plt

from load_planner.models import PlanningResult
from load_planner.shelf import Shelf
from load_planner.vehicle import Vehicle

MARGIN = 200


def draw_shelf(ax, vehicle: Vehicle, shelf: Shelf, show_ids: bool = True) -> None:
    """Draw one shelf's floor plan: vehicle outline plus every placement."""
    ax.clear()
    ax.add_patch(
        plt.Rectangle(
            (0, 0),
            vehicle.length,
            vehicle.width,
            fill=False,
            edgecolor="black",
            linewidth=2,
        )
    )
    for placement in shelf.placements:
        color = "tab:blue" if placement.load.stackable else "tab:orange"
        ax.add_patch(
            plt.Rectangle(
                (placement.x, placement.y),
                placement.length,
                placement.width,
                fill=True,
                facecolor=color,
                alpha=0.5,
                edgecolor="black",
            )
        )
        if show_ids:
            ax.text(
                placement.x + placement.length / 2,
                placement.y + placement.width / 2,
                str(placement.load_id),
                ha="center",
                va="center",
                fontsize=7,
                color="black",
                zorder=10,
            )
    ax.set_title(f"z={shelf.z0:g} h={shelf.height:g}: {len(shelf.placements)}")
    ax.set_xlim(-MARGIN, vehicle.length + MARGIN)
    ax.set_ylim(-MARGIN, vehicle.width + MARGIN)
    ax.set_aspect("equal")


def vehicle_figure(vehicle: Vehicle, show_ids: bool = True):
    rows = max(1, len(vehicle.shelves))
    fig = plt.Figure(figsize=(10, 2.2 * rows))
    for idx, shelf in enumerate(vehicle.shelves):
        ax = fig.add_subplot(rows, 1, idx + 1)
        draw_shelf(ax, vehicle, shelf, show_ids=show_ids)
    fig.suptitle(
        f"{vehicle.label}: {vehicle.total_weight:g} / {vehicle.max_weight:g} kg"
    )
    return fig


def _file_name(label: str) -> str:
    return re.sub(r"[^A-Za-z0-9]+", "_", label).strip("_").lower() + ".png"


def save_vehicle_figures(result: PlanningResult, out_dir: str) -> List[str]:
    """Write one PNG per vehicle and return the written paths."""
    os.makedirs(out_dir, exist_ok=True)
    paths = []
    for vehicle in result.vehicles:
        path = os.path.join(out_dir, _file_name(vehicle.label))
        vehicle_figure(vehicle).savefig(path)
        paths.append(path)
    return paths
