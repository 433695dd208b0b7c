#main.py
import logging
import os
import random

import pandas as pd

from config import build_configs, parse_args, selected_views
from raymarch.background import render_background
from raymarch.blackhole import BlackHole
from raymarch.camera import camera_from_preset, get_preset
from raymarch.image import save_image
from raymarch.raytracing import trace_ray_path
from raymarch.renderer import render_frame, summarize_photon_data
from raymarch.settings import describe_config, export_config
from visualization.plot import plot_scene_side, plot_scene_topdown

# ---
# NORMALIZED UNITS: G = c = 1
# Schwarzschild radius: r_s = 2M, accretion disk spans [3 r_s, 10 r_s]
# ---

logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s')


def sample_ray_paths(camera, bh, config, n_samples, out_dir, tag):
    """Trace n_samples random pixels, save their paths to CSV and plot them."""
    w, h = config.width, config.height
    sampled_indices = set()
    while len(sampled_indices) < min(n_samples, w * h):
        sampled_indices.add((random.randint(0, h - 1), random.randint(0, w - 1)))

    paths, outcomes, rows = [], [], []
    for ridx, (i, j) in enumerate(sorted(sampled_indices)):
        direction = camera.get_ray_direction(j + 0.5, i + 0.5, w, h)
        result, traj = trace_ray_path(camera.position, direction, bh, config)
        paths.append(traj)
        outcomes.append(result.outcome)
        for pidx, (px, py, pz) in enumerate(traj):
            rows.append({'ray_id': ridx, 'i': i, 'j': j, 'point_idx': pidx,
                         'x': px, 'y': py, 'z': pz, 'outcome': result.outcome})

    csv_path = os.path.join(out_dir, f'sampled_rays_{tag}.csv')
    pd.DataFrame(rows).to_csv(csv_path, index=False)
    logging.info(f"Saved {len(paths)} sampled rays to {csv_path}")
    plot_scene_side(bh, camera, paths, outcomes, out_path=os.path.join(out_dir, f'scene_side_{tag}.png'))
    plot_scene_topdown(bh, camera, paths, outcomes, out_path=os.path.join(out_dir, f'scene_topdown_{tag}.png'))


def main(argv=None):
    args = parse_args(argv)
    config, physics = build_configs(args)
    if args.quiet:
        logging.getLogger().setLevel(logging.WARNING)
    describe_config(config, physics)
    if args.export_config:
        export_config(args.export_config, config, physics)

    bh = BlackHole(mass=args.bh_mass, physics=physics)
    os.makedirs(args.output_dir, exist_ok=True)
    views = selected_views(args)

    for n, view in enumerate(views, start=1):
        camera = camera_from_preset(view, fov=config.field_of_view, aspect_ratio=config.aspect_ratio)
        logging.info(f"Rendering view {n}/{len(views)} ({get_preset(view).name})...")
        out_path = os.path.join(args.output_dir, f'{args.prefix}{n}.{args.format}')

        if args.photon_data:
            img, photon_df = render_frame(camera, bh, config=config, photon_data=True)
            csv_path = os.path.join(args.output_dir, f'photon_data_{view}.csv')
            photon_df.to_csv(csv_path, index=False)
            logging.info(f"Saved photon data to {csv_path}")
            summary = summarize_photon_data(photon_df)
            print(f"\nPhoton summary ({view}):")
            print(f"  Captured by BH: {summary['captured']}")
            print(f"  Hit the disk: {summary['disk']}")
            print(f"  Escaped: {summary['escaped']}")
        else:
            img = render_frame(camera, bh, config=config)
        save_image(img, out_path)

        if args.no_gravity:
            sky = render_background(camera, config=config)
            save_image(sky, os.path.join(args.output_dir, f'no_gravity_{view}.{args.format}'))

        if args.sample_rays > 0:
            sample_ray_paths(camera, bh, config, args.sample_rays, args.output_dir, view)


if __name__ == "__main__":
    main()
