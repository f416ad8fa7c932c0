#!/usr/bin/env python
"""
Example script demonstrating vsa-calculator package usage.
"""

from pathlib import Path
import sys

# Add package to path for development
package_root = Path(__file__).parent.parent
sys.path.insert(0, str(package_root))

from vsa_calculator.core import batch_workflow, calibration, report_generator, results


def main():
    """Run example analysis."""
    output_dir = Path(__file__).parent / "output"

    print("🎯 Vsa Calculator - Example")
    print("=" * 60)

    layers = [
        {"id": "1", "d": 5.0, "vs": 180.0},
        {"id": "2", "d": 10.0, "vs": 300.0},
        {"id": "3", "d": 15.0, "vs": 600.0},
    ]

    try:
        # Step 1: All methods on a three-layer profile
        print("\n🚀 Computing all methods...")
        result = results.compute_results(layers, 1900.0, m3_formula="EXACT")
        if result is None:
            print("❌ Computation failed!")
            return 1
        for key, value in result.by_method().items():
            print(f"   {key:<6} {value:8.2f} m/s")

        # Step 2: Depth at which the exact Vsa reaches 400 m/s
        print("\n🎯 Calibrating depth for Vsa = 400 m/s...")
        depth = calibration.calibrate_depth_for_target_vsa(layers, 1900.0, 400.0, formula="EXACT")
        print(f"   Depth: {depth} m")

        # Step 3: Reports for the profile
        print("\n📊 Generating reports...")
        reporter = report_generator.VsaReporter(layers, result, output_dir / "reports", "three-layer")
        report_files = reporter.generate_comprehensive_report()

        # Step 4: Literature presets
        print("\n📚 Evaluating literature presets...")
        batch = batch_workflow.run_batch_workflow(output_dir / "batch")

        print(f"\n✅ Example completed successfully!")
        print(f"📁 Results saved in: {output_dir}")
        print(f"📊 Generated {len(report_files)} report files, {batch['summary']['evaluated']} presets evaluated")
        return 0

    except Exception as e:
        print(f"❌ Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
