import unittest

from lceval.pure.environment import Environment


class EnvironmentTestCase(unittest.TestCase):

    def test_empty(self):
        env = Environment()
        self.assertEqual(0, len(env))
        self.assertNotIn("x", env)
        self.assertRaises(KeyError, env.__getitem__, "x")
        self.assertIsNone(env.get("x"))

    def test_init(self):
        env = Environment({"x": 1, "y": 2})
        self.assertEqual({"x": 1, "y": 2}, dict(env))
        self.assertEqual(2, len(env))
        self.assertEqual({"x", "y"}, set(env))

    def test_bind_leaves_original_unmodified(self):
        env = Environment({"x": 1})
        extended = env.bind("y", 2)
        overridden = extended.bind("x", 3)

        self.assertEqual({"x": 1}, dict(env))
        self.assertEqual({"x": 1, "y": 2}, dict(extended))
        self.assertEqual({"x": 3, "y": 2}, dict(overridden))
        self.assertEqual(2, len(overridden))

    def test_shared_bindings(self):
        env = Environment()
        first = env.bind("x", 1)
        second = env.bind("x", 2)
        self.assertEqual(1, first["x"])
        self.assertEqual(2, second["x"])
        self.assertEqual(0, len(env))

    def test_update(self):
        env = Environment({"x": 1})
        updated = env.update({"x": 2, "z": 3})
        self.assertEqual({"x": 1}, dict(env))
        self.assertEqual({"x": 2, "z": 3}, dict(updated))
        self.assertEqual({"x": 2, "z": 3}, dict(env.update(updated)))

    def test_equality(self):
        self.assertEqual(Environment({"x": 1}), Environment().bind("x", 1))
        self.assertEqual(Environment({"x": 1}), Environment().bind("x", 0).bind("x", 1))
        self.assertNotEqual(Environment({"x": 1}), Environment({"x": 2}))

    def test_lookup_by_exact_name(self):
        env = Environment({"x": 1, "xs": 2})
        self.assertEqual(1, env["x"])
        self.assertNotIn("X", env)
        self.assertNotIn("x ", env)

    def test_repr(self):
        self.assertEqual("Environment({'y': 2, 'x': 1})", repr(Environment({"x": 1}).bind("y", 2)))


if __name__ == '__main__':
    unittest.main()
