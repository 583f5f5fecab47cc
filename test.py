# Top-level interface to run the ztex tests.

import unittest


if __name__ == "__main__":
    unittest.main(module=None, argv=["test.py", "discover", "-s", "tests", "-t", "."])
