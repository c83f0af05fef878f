#!/usr/bin/env python3
"""
Test runner for the crossover operators
"""

import unittest
import sys
from pathlib import Path

# Add current directory to path for imports
sys.path.append(str(Path(__file__).parent))
sys.path.append(str(Path(__file__).parent / "tests" / "test_ga_cross"))


def run_all_tests():
    """Run all test modules"""
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    # Import test modules
    try:
        import test_operations
        import test_io_utils
        import test_cli

        # Add test modules to suite
        suite.addTests(loader.loadTestsFromModule(test_operations))
        suite.addTests(loader.loadTestsFromModule(test_io_utils))
        suite.addTests(loader.loadTestsFromModule(test_cli))

        # Run tests
        runner = unittest.TextTestRunner(verbosity=2)
        result = runner.run(suite)

        return result.wasSuccessful()

    except ImportError as e:
        print(f"Failed to import test modules: {e}")
        return False


def run_integration_test():
    """Run a basic integration test"""
    print("\n" + "=" * 50)
    print("INTEGRATION TEST")
    print("=" * 50)

    import numpy as np
    from ga_cross import Individual, CrossPMX, CrossPoint
    from ga_cross.gene_utils import is_permutation_of

    rng = np.random.default_rng(2024)
    cities = list(range(20))

    print("Recombining random tours with PMX...")
    valid = True
    for _ in range(200):
        p1 = Individual(genome=rng.permutation(cities).tolist())
        p2 = Individual(genome=rng.permutation(cities).tolist())
        o1, o2 = CrossPMX().apply(p1, p2, rng)
        valid = valid and is_permutation_of(o1.genome, cities) and is_permutation_of(o2.genome, cities)

    print("Recombining real vectors with 3-point crossover...")
    p1 = Individual(genome=rng.random(30).tolist())
    p2 = Individual(genome=rng.random(30).tolist())
    o1, o2 = CrossPoint(3).apply(p1, p2, rng)
    complementary = all(
        {a, b} == {c, d}
        for a, b, c, d in zip(o1.genome, o2.genome, p1.genome, p2.genome)
    )

    success = valid and complementary
    if success:
        print("Integration test PASSED")
    else:
        print("Integration test FAILED")

    return success


if __name__ == "__main__":
    print("Running Crossover Operator Tests")
    print("=" * 60)

    # Run unit tests
    print("Running unit tests...")
    unit_success = run_all_tests()

    # Run integration test
    integration_success = run_integration_test()

    # Summary
    print("\n" + "=" * 60)
    print("TEST SUMMARY")
    print("=" * 60)
    print(f"Unit tests: {'PASSED' if unit_success else 'FAILED'}")
    print(f"Integration test: {'PASSED' if integration_success else 'FAILED'}")

    overall_success = unit_success and integration_success
    print(f"Overall: {'PASSED' if overall_success else 'FAILED'}")

    sys.exit(0 if overall_success else 1)
