import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace

from sprig.generators import compile_component_style, compile_stylesheet, style_import_path

SCSS = """
$primary: #ff0000;

.card {
  .title {
    color: $primary;
  }

  &:hover {
    color: blue;
  }
}
"""

SASS = """
$size: 4px

.badge
  padding: $size
"""


class TestStylesheets(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, name, content):
        path = self.dir / name
        path.write_text(content, encoding="utf-8")
        return path

    def test_scss_variables_and_nesting(self):
        css = compile_stylesheet(self.write("card.scss", SCSS))
        self.assertRegex(css, r"\.card \.title\{color:(red|#f00|#ff0000)\}")
        self.assertIn(".card:hover{color:blue}", css)

    def test_indented_syntax(self):
        css = compile_stylesheet(self.write("badge.sass", SASS))
        self.assertIn(".badge{padding:4px}", css)

    def test_partials_resolve_relative_to_the_file(self):
        self.write("_tokens.scss", "$accent: green;")
        css = compile_stylesheet(self.write("theme.scss", '@import "tokens";\n.a { color: $accent; }'))
        self.assertIn(".a{color:green}", css)

    def test_plain_css_passes_through(self):
        css = compile_stylesheet(self.write("plain.css", ".x { margin: 0; }"))
        self.assertEqual(css, ".x { margin: 0; }")

    def test_compile_error(self):
        with self.assertLogs("sprig.generators.styles", level="WARNING"):
            self.assertIsNone(compile_stylesheet(self.write("broken.scss", ".a { color: $missing; }")))

    def test_missing_file(self):
        with self.assertLogs("sprig.generators.styles", level="WARNING"):
            self.assertIsNone(compile_stylesheet(self.dir / "nope.scss"))

    def test_component_style(self):
        self.write("mod.scss", SCSS)
        component = SimpleNamespace(
            path=self.dir / "mod.ts",
            class_name="Card",
            is_island=True,
            metadata=SimpleNamespace(styles="./mod.scss"),
        )
        generated = compile_component_style(component)
        self.assertEqual(generated.output_path, "static/css/islands/Card.css")
        self.assertIn(".card .title{color:", generated.content)
        self.assertEqual(style_import_path(generated), "/static/css/islands/Card.css")

    def test_component_without_styles(self):
        component = SimpleNamespace(path=self.dir / "mod.ts", metadata=SimpleNamespace(styles=None))
        self.assertIsNone(compile_component_style(component))


if __name__ == "__main__":
    unittest.main()
