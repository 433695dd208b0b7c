import logging
import os

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.lines import Line2D

from raymarch.raytracing import DISK, ESCAPE, HORIZON

logger = logging.getLogger(__name__)

OUTCOME_COLORS = {HORIZON: 'red', DISK: 'orange', ESCAPE: 'royalblue'}

# projection name -> (horizontal axis index, vertical axis index, labels)
PROJECTIONS = {
    'side': (2, 1, ('z', 'y')),
    'topdown': (0, 2, ('x', 'z')),
}


def _plot_scene(bh, camera, paths, outcomes, out_path, projection, title):
    hx, vx, (hlabel, vlabel) = PROJECTIONS[projection]
    center = bh.position.to_array()
    ch, cv = center[hx], center[vx]

    fig, ax = plt.subplots(figsize=(8, 8))
    # Event horizon and photon sphere
    ax.add_patch(plt.Circle((ch, cv), bh.rs, color='black', zorder=5))
    ax.add_patch(plt.Circle((ch, cv), bh.photon_sphere_radius, color='gray', fill=False, linestyle='--'))
    # Accretion disk: an edge-on segment from the side, an annulus from above
    if projection == 'side':
        for sign in (-1, 1):
            ax.plot([ch + sign * bh.disk_inner_radius, ch + sign * bh.disk_outer_radius], [cv, cv],
                    color='orange', lw=4, alpha=0.6)
    else:
        ax.add_patch(plt.Circle((ch, cv), bh.disk_inner_radius, color='orange', fill=False, lw=2))
        ax.add_patch(plt.Circle((ch, cv), bh.disk_outer_radius, color='orange', fill=False, lw=2))
    # Camera and its viewing direction
    cam = camera.position.to_array()
    fwd = camera.direction.to_array()
    ax.plot(cam[hx], cam[vx], 'go', markersize=10)
    ax.arrow(cam[hx], cam[vx], fwd[hx] * bh.rs, fwd[vx] * bh.rs, color='green', width=0.02)
    # Ray paths
    for traj, outcome in zip(paths, outcomes):
        ax.plot(traj[:, hx], traj[:, vx], color=OUTCOME_COLORS[outcome], lw=1, alpha=0.8)
        ax.scatter(traj[-1, hx], traj[-1, vx], color=OUTCOME_COLORS[outcome], s=10, zorder=6)

    ax.set_aspect('equal')
    ax.set_xlabel(hlabel)
    ax.set_ylabel(vlabel)
    ax.set_title(title)
    legend_elements = [
        Line2D([0], [0], marker='o', color='w', label='Camera', markerfacecolor='green', markersize=10),
        Line2D([0], [0], color='black', lw=4, label='Event Horizon'),
        Line2D([0], [0], color='gray', lw=1, linestyle='--', label='Photon Sphere'),
        Line2D([0], [0], color='orange', lw=4, alpha=0.6, label='Accretion Disk'),
    ]
    for outcome, color in OUTCOME_COLORS.items():
        legend_elements.append(Line2D([0], [0], color=color, lw=1, label=f'Ray ({outcome})'))
    ax.legend(handles=legend_elements, loc='upper right')
    lim = max(bh.disk_outer_radius, np.linalg.norm(cam - center)) * 1.1
    ax.set_xlim(ch - lim, ch + lim)
    ax.set_ylim(cv - lim, cv + lim)

    directory = os.path.dirname(out_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    plt.savefig(out_path, bbox_inches='tight')
    plt.close(fig)
    logger.info("Saved %s scene image to %s", projection, out_path)


def plot_scene_side(bh, camera, paths, outcomes, out_path='images/scene_side.png'):
    """
    Side (z-y) view of the scene: horizon, photon sphere, edge-on disk,
    camera and the sampled ray paths coloured by how each ray ended.
    paths: list of (N, 3) arrays from trace_ray_path
    outcomes: matching list of outcome names
    """
    _plot_scene(bh, camera, paths, outcomes, out_path, 'side', 'Side Scene View (Ray Paths)')


def plot_scene_topdown(bh, camera, paths, outcomes, out_path='images/scene_topdown.png'):
    """Top-down (x-z) view of the same scene, disk drawn as its annulus."""
    _plot_scene(bh, camera, paths, outcomes, out_path, 'topdown', 'Top-Down Scene View (Ray Paths)')
