import unittest
from pathlib import Path

from sprig.compiler import parse_template
from sprig.metadata import DirectiveMetadata, PipeMetadata
from sprig.project import SprigDirective
from sprig.registry import (
    DirectiveRegistry,
    PipeRegistry,
    RegistryFrozenError,
    collect_directive_usages,
    generate_directive_imports,
    generate_pipe_imports,
    transform_custom_directive,
)


def highlight_directive():
    return SprigDirective(
        path=Path("src/directives/highlight.ts"),
        relative_path="directives/highlight",
        metadata=DirectiveMetadata(selector="*highlight", class_name="HighlightDirective"),
        relative_source="directives/highlight.ts",
    )


class TestDirectiveRegistry(unittest.TestCase):
    def setUp(self):
        self.registry = DirectiveRegistry()
        self.entry = self.registry.register(highlight_directive())

    def test_register(self):
        self.assertEqual(self.entry.selector, "highlight")
        self.assertEqual(self.entry.class_name, "HighlightDirective")
        self.assertEqual(self.entry.transform_fn, "applyHighlightDirective")
        self.assertEqual(self.entry.import_path, "@/directives/highlight.ts")
        self.assertEqual(Path(self.entry.source_path), Path("src/directives/highlight.ts"))

    def test_queries(self):
        self.assertTrue(self.registry.has("highlight"))
        self.assertFalse(self.registry.has("unknown"))
        self.assertIn("highlight", self.registry)
        self.assertIs(self.registry.get("highlight"), self.entry)
        self.assertIsNone(self.registry.get("unknown"))
        self.assertEqual(self.registry.get_all(), [self.entry])
        self.assertEqual(len(self.registry), 1)

    def test_custom_output_dir_and_alias(self):
        registry = DirectiveRegistry()
        entry = registry.register(highlight_directive(), output_dir="generated/directives", import_alias="~")
        self.assertEqual(entry.import_path, "~/generated/directives/highlight.ts")

    def test_usages_exclude_built_ins(self):
        document = parse_template("<p *highlight=\"'yellow'\" *if=\"x\"><span *for=\"let a of b\">{{ a }}</span></p>").document
        self.assertEqual(collect_directive_usages(document), ["highlight"])

    def test_import_line(self):
        self.assertEqual(
            generate_directive_imports([self.entry]),
            ['import { applyHighlightDirective } from "@/directives/highlight.ts";'],
        )

    def test_transform_custom_directive(self):
        self.assertEqual(
            transform_custom_directive("highlight", "'yellow'", self.registry),
            "{...applyHighlightDirective({}, 'yellow')}",
        )
        self.assertEqual(
            transform_custom_directive("highlight", "", self.registry),
            "{...applyHighlightDirective({}, undefined)}",
        )
        self.assertIsNone(transform_custom_directive("unknown", "'x'", self.registry))
        self.assertIsNone(transform_custom_directive("highlight", "'x'", None))

    def test_frozen_registry_rejects_registration(self):
        self.registry.freeze()
        self.assertTrue(self.registry.frozen)
        with self.assertRaises(RegistryFrozenError):
            self.registry.register(DirectiveMetadata(selector="*tooltip", class_name="TooltipDirective"))
        self.assertTrue(self.registry.has("highlight"))


class TestPipeRegistry(unittest.TestCase):
    def test_register(self):
        registry = PipeRegistry()
        entry = registry.register(PipeMetadata(name="truncate", class_name="TruncatePipe", pure=False))
        self.assertEqual(entry.function_name, "truncate")
        self.assertEqual(entry.import_path, "@/pipes/truncate.ts")
        self.assertFalse(entry.pure)
        self.assertEqual(
            generate_pipe_imports([entry]),
            ['import { truncate } from "@/pipes/truncate.ts";'],
        )

    def test_registries_are_independent(self):
        first, second = PipeRegistry(), PipeRegistry()
        first.register(PipeMetadata(name="truncate", class_name="TruncatePipe"))
        self.assertFalse(second.has("truncate"))


if __name__ == "__main__":
    unittest.main()
