"""
Main CLI entry point for vsa-calculator package.
"""

import click
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple


VERSION = "1.0.0"


def _load_input(profile_file: Optional[Path], preset_name: Optional[str],
                rho: Optional[float], file_rho: float) -> Tuple[List[Dict], float, Dict, str]:
    """Layers, default density, expected values and name from a file or a preset."""
    from ..core.presets import get_preset
    from ..core.profile_io import read_profile

    if (profile_file is None) == (preset_name is None):
        raise click.UsageError("Give either a PROFILE file or --preset")
    if preset_name is not None:
        preset = get_preset(preset_name)
        default_rho = rho if rho is not None else preset["default_rho"]
        return preset["layers"], default_rho, preset["expected"], preset["name"]
    layers = read_profile(profile_file)
    return layers, (rho if rho is not None else file_rho), {}, profile_file.stem


def _fail(error: Exception):
    click.echo(f"❌ Error: {error}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=VERSION)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def cli(verbose):
    """Average Shear-Wave Velocity (Vsa) Calculator.

    Computes the average shear-wave velocity of a layered soil column by
    seven simplified formulas (M1-M7) and by the exact transfer-matrix
    fundamental period, and compares them with literature values.
    """
    if verbose:
        click.echo(f"🔬 Vsa Calculator v{VERSION}")


@cli.command()
@click.argument('profile', required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--preset', 'preset_name', help='Use a bundled literature profile instead of a file')
@click.option('--rho', type=float, help='Default density (kg/m3, or t/m3 below 50)')
@click.option('--depth-m12', type=float, help='Depth for M1, M2, M4, M5 (default: whole profile)')
@click.option('--depth-m3', type=float, help='Depth for M3, M6, M7, Exact with --m3-mode TARGET')
@click.option('--m3-mode', type=click.Choice(['TOTAL', 'TARGET']), help='Depth basis of the period methods')
@click.option('--m3-formula', type=click.Choice(['MOC', 'RAYLEIGH', 'EXACT']), help='Period formula behind M3')
@click.option('--config', 'config_file', type=click.Path(exists=True, path_type=Path),
              help='YAML/JSON configuration file')
@click.option('--json', 'as_json', is_flag=True, help='Print the geotechnical report as JSON')
def compute(profile, preset_name, rho, depth_m12, depth_m3, m3_mode, m3_formula, config_file, as_json):
    """Compute Vsa by every method for one profile.

    PROFILE: Text model (N, then "d vs [rho]" rows) or CSV file
    """
    try:
        from ..core.report_generator import generate_geotechnical_report
        from ..core.results import compute_results
        from ..utils.config import get_config

        config = get_config(config_file)
        calc = config["calculation"]
        layers, default_rho, expected, name = _load_input(
            profile, preset_name, rho, calc["default_rho"])

        m12 = depth_m12 if depth_m12 is not None else calc["depth_m12"]
        m3 = depth_m3 if depth_m3 is not None else calc["depth_m3"]
        mode = m3_mode or calc["m3_mode"]
        formula = m3_formula or calc["m3_formula"]

        result = compute_results(layers, default_rho, m12, m3, mode, formula, config["solver"])
        if result is None:
            raise ValueError("Vsa could not be computed for this profile (check thicknesses, velocities and depths)")

        if as_json:
            click.echo(generate_geotechnical_report(
                layers, result, default_rho, expected, name,
                depth_mode="CUSTOM" if mode == "TARGET" else "VS30",
                target_depth=m3 if mode == "TARGET" else None,
                m3_formula=formula))
            return

        click.echo(f"📁 Profile: {name} ({len(layers)} layers)")
        click.echo(f"📏 Depth M1/M2/M4/M5: {result.h_m12:.2f} m | M3/M6/M7/Exact: {result.h_used:.2f} m")
        click.echo(f"⚙️  M3 formula: {formula}")
        for key, value in result.by_method().items():
            line = f"   {key:<6} {value:9.2f} m/s"
            if expected.get(key):
                line += f"   (expected {expected[key]:g})"
            click.echo(line)

    except click.UsageError:
        raise
    except Exception as e:
        _fail(e)


@cli.command()
@click.argument('profile', required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--preset', 'preset_name', help='Use a bundled literature profile instead of a file')
@click.option('--target', 'vsa_target', required=True, type=float, help='Target Vsa (m/s)')
@click.option('--rho', type=float, help='Default density (kg/m3, or t/m3 below 50)')
@click.option('--h-min', type=float, help='Lower depth bound (m)')
@click.option('--h-max', type=float, help='Upper depth bound (m)')
@click.option('--seed', 'seed_depth', type=float, help='Depth guess that narrows the search')
@click.option('--formula', type=click.Choice(['MOC', 'RAYLEIGH', 'EXACT']), help='Period formula')
@click.option('--config', 'config_file', type=click.Path(exists=True, path_type=Path),
              help='YAML/JSON configuration file')
def calibrate(profile, preset_name, vsa_target, rho, h_min, h_max, seed_depth, formula, config_file):
    """Find the depth at which the period-based Vsa matches a target.

    PROFILE: Text model or CSV file
    """
    try:
        from ..core.calibration import calibrate_depth_for_target_vsa
        from ..core.results import compute_vsa_m3_at_depth
        from ..utils.config import get_config

        config = get_config(config_file)
        cal = config["calibration"]
        layers, default_rho, _, name = _load_input(
            profile, preset_name, rho, config["calculation"]["default_rho"])
        formula = formula or cal["formula"]

        click.echo(f"🎯 Calibrating {name} for Vsa = {vsa_target:g} m/s ({formula})")
        depth = calibrate_depth_for_target_vsa(
            layers, default_rho, vsa_target,
            h_min=h_min if h_min is not None else cal["h_min"],
            h_max=h_max if h_max is not None else cal["h_max"],
            tolerance=cal["tolerance"],
            max_iter=cal["max_iter"],
            seed_depth=seed_depth,
            formula=formula,
            solver_config=config["solver"],
        )
        if depth is None:
            raise ValueError("Calibration not possible for this profile")

        achieved = compute_vsa_m3_at_depth(layers, default_rho, depth, formula, config["solver"])
        click.echo(f"✅ Calibrated depth: {depth:.2f} m")
        if achieved is not None:
            click.echo(f"📊 Vsa at that depth: {achieved:.2f} m/s (target {vsa_target:g})")

    except click.UsageError:
        raise
    except Exception as e:
        _fail(e)


@cli.command()
@click.argument('output_dir', type=click.Path(path_type=Path))
@click.option('--depth', 'target_depth', type=float,
              help='Custom depth for every method (default: whole profile, compared with literature)')
@click.option('--presets-file', type=click.Path(exists=True, path_type=Path),
              help='Preset catalogue (default: bundled literature presets)')
@click.option('--m3-formula', type=click.Choice(['MOC', 'RAYLEIGH', 'EXACT']), help='Period formula behind M3')
@click.option('--config', 'config_file', type=click.Path(exists=True, path_type=Path),
              help='YAML/JSON configuration file')
def batch(output_dir, target_depth, presets_file, m3_formula, config_file):
    """Evaluate every preset and write a summary table.

    OUTPUT_DIR: Directory for the summary CSV
    """
    try:
        from ..core.batch_workflow import run_batch_workflow
        from ..utils.config import get_config

        config = get_config(config_file)
        if m3_formula:
            config["calculation"]["m3_formula"] = m3_formula

        results = run_batch_workflow(output_dir, config, presets_file, target_depth)

        if results.get("success", False):
            summary = results.get("summary", {})
            click.echo(f"📊 Evaluated {summary.get('evaluated', 0)} of {summary.get('total_presets', 0)} presets")
            if summary.get("needs_narrowing"):
                click.echo(f"⚠️  {summary['needs_narrowing']} preset(s) with deviations above 5%")
        else:
            click.echo("❌ No preset could be evaluated!", err=True)
            sys.exit(1)

    except Exception as e:
        _fail(e)


@cli.command()
@click.argument('output_dir', type=click.Path(path_type=Path))
@click.argument('profile', required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--preset', 'preset_name', help='Use a bundled literature profile instead of a file')
@click.option('--rho', type=float, help='Default density (kg/m3, or t/m3 below 50)')
@click.option('--m3-formula', type=click.Choice(['MOC', 'RAYLEIGH', 'EXACT']), help='Period formula behind M3')
@click.option('--dpi', type=int, help='Figure resolution (DPI)')
@click.option('--config', 'config_file', type=click.Path(exists=True, path_type=Path),
              help='YAML/JSON configuration file')
def report(output_dir, profile, preset_name, rho, m3_formula, dpi, config_file):
    """Generate CSV, figure, text and JSON reports for one profile.

    OUTPUT_DIR: Directory for the report files
    PROFILE: Text model or CSV file
    """
    try:
        from ..core.report_generator import VsaReporter
        from ..core.results import compute_results
        from ..utils.config import get_config

        config = get_config(config_file)
        calc = config["calculation"]
        if dpi:
            config["output"]["dpi"] = dpi
        layers, default_rho, expected, name = _load_input(
            profile, preset_name, rho, calc["default_rho"])

        result = compute_results(layers, default_rho, calc["depth_m12"], calc["depth_m3"],
                                 calc["m3_mode"], m3_formula or calc["m3_formula"], config["solver"])
        if result is None:
            raise ValueError("Vsa could not be computed for this profile")

        reporter = VsaReporter(layers, result, output_dir, name, expected, default_rho, config)
        report_files = reporter.generate_comprehensive_report()

        click.echo(f"✅ Report generation completed!")
        click.echo(f"📊 Generated {len(report_files)} report components:")
        for path in report_files.values():
            click.echo(f"   • {path.name}")

    except click.UsageError:
        raise
    except Exception as e:
        _fail(e)


@cli.command()
@click.option('--presets-file', type=click.Path(exists=True, path_type=Path),
              help='Preset catalogue (default: bundled literature presets)')
@click.option('--json', 'as_json', is_flag=True, help='Print the catalogue as JSON')
def presets(presets_file, as_json):
    """List the literature benchmark profiles."""
    try:
        from ..core.layers import compute_h
        from ..core.presets import load_presets

        catalogue = load_presets(presets_file)
        if as_json:
            click.echo(json.dumps(catalogue, indent=2, ensure_ascii=False))
            return

        click.echo(f"📚 {len(catalogue)} presets")
        for preset in catalogue:
            h = compute_h(preset["layers"])
            exact = preset["expected"].get("Exact")
            click.echo(f"   • {preset['name']}: {len(preset['layers'])} layers, H = {h:.1f} m, "
                       f"depth {preset['auto_depth_mode']} {preset['auto_depth_value']:g} m"
                       + (f", Vsa(Exact) = {exact:g} m/s" if exact else ""))

    except Exception as e:
        _fail(e)


@cli.command()
def examples():
    """Show example usage and commands."""
    click.echo("🎯 Vsa Calculator - Example Usage")
    click.echo("=" * 60)
    click.echo()

    click.echo("📋 Single profile:")
    click.echo("   vsa-calculator compute profile.txt")
    click.echo("   vsa-calculator compute --preset Takabatake --m3-formula EXACT")
    click.echo("   vsa-calculator compute profile.csv --m3-mode TARGET --depth-m3 30 --json")
    click.echo()

    click.echo("🔧 Depth calibration:")
    click.echo("   vsa-calculator calibrate profile.txt --target 250")
    click.echo("   vsa-calculator calibrate --preset Hasanoğlu --target 300 --formula MOC --seed 40")
    click.echo()

    click.echo("📊 Literature validation:")
    click.echo("   vsa-calculator presets")
    click.echo("   vsa-calculator batch output/")
    click.echo("   vsa-calculator batch output/ --depth 30")
    click.echo()

    click.echo("📄 Reports:")
    click.echo("   vsa-calculator report reports/ profile.txt")
    click.echo("   vsa-calculator report reports/ --preset Özkan --dpi 300")
    click.echo()

    click.echo("🔍 Getting Help:")
    click.echo("   vsa-calculator --help")
    click.echo("   vsa-calculator compute --help")


if __name__ == '__main__':
    cli()
