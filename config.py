import argparse
import math

from raymarch.camera import CAMERA_PRESETS, preset_key
from raymarch.settings import DEFAULT_CONFIG, PhysicsConfig, RenderConfig

VIEW_CHOICES = [preset_key(p.name) for p in CAMERA_PRESETS] + ['all']


def build_parser():
    parser = argparse.ArgumentParser(description="Black Hole Ray Marching Renderer")
    parser.add_argument('--width', type=int, default=DEFAULT_CONFIG.width, help='Image width in pixels (default: 800)')
    parser.add_argument('--height', type=int, default=DEFAULT_CONFIG.height, help='Image height in pixels (default: 600)')
    parser.add_argument('--fov', type=float, default=45.0, help='Vertical field of view in degrees (default: 45)')
    parser.add_argument('--bh-mass', type=float, default=1.0, help='Black hole mass (default: 1, r_s = 2M)')
    parser.add_argument('--steps', type=int, default=DEFAULT_CONFIG.max_ray_steps, help='Maximum march steps per ray (default: 500)')
    parser.add_argument('--max-distance', type=float, default=DEFAULT_CONFIG.max_ray_distance, help='Maximum distance a ray travels (default: 50)')
    parser.add_argument('--supersampling', type=int, default=DEFAULT_CONFIG.supersampling_level, help='Sub-samples per pixel axis (default: 2, i.e. 2x2)')
    parser.add_argument('--no-antialiasing', action='store_true', help='Trace one ray per pixel')
    parser.add_argument('--no-lens-flare', action='store_true', help='Disable the lens flare near the horizon')
    parser.add_argument('--no-turbulence', action='store_true', help='Disable angular turbulence on the disk')
    parser.add_argument('--no-doppler', action='store_true', help='Disable Doppler brightening of the disk')
    parser.add_argument('--no-post-processing', action='store_true', help='Skip contrast enhancement')
    parser.add_argument('--contrast', type=float, default=DEFAULT_CONFIG.contrast, help='Contrast enhancement factor (default: 1.2)')
    parser.add_argument('--gamma-correct', action='store_true', help='Apply gamma correction (gamma 2.2) after contrast')
    # Scene / output
    parser.add_argument('--view', action='append', choices=VIEW_CHOICES, help='Camera preset to render; repeatable (default: front, side, top)')
    parser.add_argument('--output-dir', type=str, default='images', help='Output directory (default: images)')
    parser.add_argument('--prefix', type=str, default='black_hole_', help='Output filename prefix (default: black_hole_)')
    parser.add_argument('--format', type=str, default='ppm', choices=['ppm', 'png'], help='Output image format (default: ppm)')
    parser.add_argument('--workers', type=int, default=1, help='Worker processes rendering rows in parallel (default: 1)')
    # Diagnostics
    parser.add_argument('--sample-rays', type=int, default=0, help='Trace N random pixels and plot/save their paths')
    parser.add_argument('--photon-data', action='store_true', help='Save per-pixel ray outcomes to photon_data.csv')
    parser.add_argument('--no-gravity', action='store_true', help='Also save the background rendered without the black hole')
    parser.add_argument('--export-config', type=str, default=None, help='Write the effective configuration as JSON to this path')
    parser.add_argument('--quiet', action='store_true', help='Hide progress bars and per-row progress')
    return parser


def build_configs(args):
    """Turn parsed arguments into (RenderConfig, PhysicsConfig)."""
    config = RenderConfig(
        width=args.width,
        height=args.height,
        field_of_view=math.radians(args.fov),
        max_ray_steps=args.steps,
        max_ray_distance=args.max_distance,
        antialiasing=not args.no_antialiasing,
        supersampling_level=args.supersampling,
        post_processing=not args.no_post_processing,
        contrast=args.contrast,
        gamma_correction=args.gamma_correct,
        lens_flare=not args.no_lens_flare,
        turbulence=not args.no_turbulence,
        doppler_shift=not args.no_doppler,
        workers=args.workers,
        show_progress=not args.quiet,
    )
    return config, PhysicsConfig()


def selected_views(args):
    if not args.view:
        return ['front', 'side', 'top']
    if 'all' in args.view:
        return [preset_key(p.name) for p in CAMERA_PRESETS]
    return list(dict.fromkeys(args.view))


def parse_args(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.bh_mass <= 0:
        parser.error('--bh-mass must be positive')
    if args.sample_rays < 0:
        parser.error('--sample-rays must be >= 0')
    try:
        build_configs(args)
    except ValueError as e:
        parser.error(str(e))
    return args
