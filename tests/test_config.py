import logging
import unittest
import numpy as np

import gpwarp as gw
import gpwarp.num as gnp
from gpwarp import config


class TestBackend(unittest.TestCase):
    def test_numpy_backend(self):
        self.assertEqual(config.get_backend(), "numpy")
        self.assertIn("backend='numpy'", repr(config.get_config()))

    def test_unsupported_backend(self):
        with self.assertRaises(ValueError):
            config.set_backend("jax")
        self.assertEqual(config.get_backend(), "numpy")

    def test_version(self):
        self.assertEqual(gw.__version__, config.get_config().version)


class TestDtype(unittest.TestCase):
    def setUp(self):
        self.saved = config.get_config().dtype

    def tearDown(self):
        config.get_config().dtype = self.saved

    def test_normalize_dtype_spec(self):
        self.assertEqual(config._normalize_dtype_spec(None), "float64")
        self.assertEqual(config._normalize_dtype_spec(float), "float64")
        self.assertEqual(config._normalize_dtype_spec(np.float64), "float64")
        self.assertEqual(config._normalize_dtype_spec("double"), "float64")
        self.assertEqual(config._normalize_dtype_spec(np.float32), "float32")
        self.assertEqual(config._normalize_dtype_spec("single"), "float32")

    def test_set_dtype(self):
        config.set_dtype("float32")
        self.assertEqual(config.get_config().dtype, "float32")
        with self.assertRaises(ValueError):
            config.set_dtype("int8")
        self.assertEqual(config.get_config().dtype, "float32")


class TestLoggerAndCaches(unittest.TestCase):
    def test_set_log_level(self):
        logger = config.get_logger()
        saved = logger.level
        try:
            config.set_log_level(logging.WARNING)
            self.assertFalse(logger.isEnabledFor(logging.INFO))
            with self.assertLogs("gpwarp", level="WARNING"):
                logger.warning("still shown")
        finally:
            config.set_log_level(saved)
        self.assertEqual(logger.level, saved)

    def test_clear_caches(self):
        caches = config.get_config().caches
        caches["a"], caches["b"] = 1, 2
        config.clear_caches("a")
        self.assertNotIn("a", caches)
        self.assertIn("b", caches)
        config.clear_caches()
        self.assertEqual(caches, {})


class TestInfinityReplacement(unittest.TestCase):
    def test_inftobigf(self):
        a = gnp.inftobigf(np.array([1.0, np.inf]))
        self.assertEqual(a[0], 1.0)
        self.assertEqual(a[1], gnp.fmax / 1000.0)
        self.assertTrue(np.all(np.isfinite(a)))
        b = gnp.inftobigf(np.array([np.inf]), bigf=7.0)
        self.assertEqual(b[0], 7.0)


if __name__ == "__main__":
    unittest.main()
