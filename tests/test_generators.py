import unittest
from pathlib import Path
from types import SimpleNamespace

from sprig.generators import (
    component_output_path,
    generate_component,
    generate_directive,
    generate_directives_index,
    generate_layout,
    generate_pipe,
    generate_pipe_helpers,
    generate_pipes_index,
    generate_service_container,
)
from sprig.generators.base import plain_resolver
from sprig.generators.components import rewrite_service_references, signal_references
from sprig.metadata import DirectiveMetadata, PipeMetadata, ServiceMetadata
from sprig.project import SprigComponent, SprigDirective, SprigPipe, SprigService


def highlight():
    return SprigDirective(
        path=Path("src/directives/highlight.ts"),
        relative_path="directives/highlight",
        metadata=DirectiveMetadata(selector="*highlight", class_name="HighlightDirective"),
        relative_source="directives/highlight.ts",
    )


def truncate():
    return SprigPipe(
        path=Path("src/pipes/truncate.ts"),
        relative_path="pipes/truncate",
        metadata=PipeMetadata(name="truncate", class_name="TruncatePipe"),
        relative_source="pipes/truncate.ts",
    )


class TestDirectiveWrappers(unittest.TestCase):
    def test_wrapper(self):
        generated = generate_directive(highlight())
        self.assertEqual(generated.output_path, "directives/highlight.ts")
        content = generated.content
        self.assertIn('import { HighlightDirective } from "@/src/directives/highlight.ts";', content)
        self.assertIn("const _highlightInstance = new HighlightDirective();", content)
        self.assertIn("export function applyHighlightDirective(", content)
        self.assertIn("const result = _highlightInstance.transform(null, value);", content)
        self.assertIn("return { ...props, ...result };", content)

    def test_index(self):
        generated = generate_directives_index([highlight()])
        self.assertEqual(generated.output_path, "directives/mod.ts")
        self.assertEqual(generated.content, 'export { applyHighlightDirective } from "./highlight.ts";\n')

    def test_empty_index_still_exists(self):
        generated = generate_directives_index([])
        self.assertEqual(generated.output_path, "directives/mod.ts")
        self.assertIn("No custom directives", generated.content)
        self.assertIn("export {};", generated.content)


class TestPipeWrappers(unittest.TestCase):
    def test_wrapper(self):
        generated = generate_pipe(truncate(), output_dir="gen/pipes", import_alias="~")
        self.assertEqual(generated.output_path, "gen/pipes/truncate.ts")
        self.assertIn('import { TruncatePipe } from "~/src/pipes/truncate.ts";', generated.content)
        self.assertIn("export function truncate(value: unknown, ...args: unknown[]): unknown {", generated.content)
        self.assertIn("return _truncateInstance.transform(value, ...args);", generated.content)

    def test_index(self):
        self.assertEqual(
            generate_pipes_index([truncate()]).content,
            'export { truncate } from "./truncate.ts";\n',
        )
        self.assertIn("No custom pipes", generate_pipes_index([]).content)

    def test_helpers(self):
        generated = generate_pipe_helpers()
        self.assertEqual(generated.output_path, "pipes/helpers.ts")
        for name in ("toTitleCase", "formatCurrency", "formatDate", "formatNumber", "formatPercent", "asyncPipe"):
            self.assertIn(f"export function {name}", generated.content)


class TestServiceContainer(unittest.TestCase):
    def test_container(self):
        services = [
            SprigService(
                path=Path("src/services/api.ts"),
                relative_path="services/api",
                metadata=ServiceMetadata(class_name="ApiService", on_startup=["connect"]),
                relative_source="services/api.ts",
            ),
            SprigService(
                path=Path("src/services/clock.ts"),
                relative_path="services/clock",
                metadata=ServiceMetadata(class_name="ClockService", scope="transient"),
                relative_source="services/clock.ts",
            ),
        ]
        generated = generate_service_container(services)
        content = generated.content
        self.assertEqual(generated.output_path, "services/container.ts")
        self.assertIn('import { ApiService } from "@/src/services/api.ts";', content)
        self.assertIn("export function getApiService(): ApiService {\n  return singleton(ApiService);\n}", content)
        self.assertIn("export function getClockService(): ClockService {\n  return new ClockService();\n}", content)
        self.assertIn("  const apiService = getApiService();\n  await apiService.connect();", content)
        self.assertNotIn("getClockService();", content)


class TestLayout(unittest.TestCase):
    def test_layout(self):
        generated = generate_layout("<html><body><outlet /></body></html>")
        self.assertEqual(generated.output_path, "routes/_layout.tsx")
        self.assertIn("export default define.layout(function RootLayout({ Component }) {", generated.content)
        self.assertIn("<html><body><Component /></body></html>", generated.content)

    def test_named_layout_with_components(self):
        known = [SimpleNamespace(class_name="SiteHeader", is_island=False)]
        generated = generate_layout("<site-header /><main><outlet /></main>", name="Shell", known_components=known)
        self.assertIn('import SiteHeader from "@/components/SiteHeader.tsx";', generated.content)
        self.assertIn("function Shell({ Component })", generated.content)

    def test_slot_renders_the_page(self):
        generated = generate_layout("<body><slot /></body>")
        self.assertIn("<body><Component /></body>", generated.content)
        self.assertNotIn("children", generated.content)


CARD_SOURCE = '''
@Component({ template: "./mod.html" })
export class UserCard {
  @Input() name: string;
  @Input() role: string = "member";

  get label() {
    return `${this.name} (${this.role})`;
  }
}
'''

COUNTER_SOURCE = '''
@Component({ template: "./mod.html", island: true })
export class Counter {
  count: number = 0;
  @Input() start: number = 0;

  get doubled() {
    return this.count * 2;
  }

  increment() {
    this.count++;
  }

  reset() {
    this.start = 0;
    this.count = this.start;
  }

  ngOnInit() {
    this.count = this.start;
  }

  ngOnDestroy() {
    console.log("bye");
  }
}
'''

TIMER_SOURCE = '''
@Component({ template: "./mod.html" })
export class Timer {
  constructor(private clock: ClockService) {}

  now() {
    return this.clock.now();
  }
}
'''


class TestComponents(unittest.TestCase):
    def test_server_component(self):
        component = SprigComponent.from_source(
            CARD_SOURCE, '<div class="card">{{ label }}</div>', "components/user-card",
        )
        self.assertFalse(component.is_island)
        generated = generate_component(component)
        content = generated.content
        self.assertEqual(generated.output_path, "components/UserCard.tsx")
        self.assertIn("interface UserCardProps {\n  name: string;\n  role?: string;\n}", content)
        self.assertIn("export default function UserCard(props: UserCardProps) {", content)
        self.assertIn("  const name = props.name;", content)
        self.assertIn('  const role = props.role ?? "member";', content)
        self.assertIn("  const label = `${name} (${role})`;", content)
        self.assertIn('  return <div className="card">{label}</div>;', content)
        self.assertNotIn("@preact/signals", content)

    def test_island_component(self):
        template = '<button (click)="increment()">{{ count }} / {{ doubled }}</button>'
        component = SprigComponent.from_source(COUNTER_SOURCE, template, "islands/counter")
        self.assertTrue(component.is_island)
        generated = generate_component(component)
        content = generated.content
        self.assertEqual(generated.output_path, "islands/Counter.tsx")
        self.assertIn('import { useSignal, computed } from "@preact/signals";', content)
        self.assertIn('import { useEffect } from "preact/hooks";', content)
        self.assertIn("  const count = useSignal<number>(0);", content)
        self.assertIn("  const start = useSignal<number>(props.start ?? 0);", content)
        self.assertIn("  const doubled = computed(() => count.value * 2);", content)
        self.assertIn("  const increment = () => {\n    count.value++;\n  };", content)
        self.assertIn("    count.value = start.value;", content)
        self.assertIn("  useEffect(() => {", content)
        self.assertIn("    return () => {\n      console.log(\"bye\");\n    };", content)
        self.assertIn("  }, []);", content)
        self.assertIn("{count.value} / {doubled.value}", content)
        self.assertIn("onClick={() => increment()}", content)
        self.assertNotIn("props.start;", content)

    def test_island_inferred_from_events(self):
        component = SprigComponent.from_source(
            "@Component({})\nexport class Toggle {}", '<button (click)="flip()">x</button>', "toggle",
        )
        self.assertTrue(component.is_island)
        self.assertEqual(component_output_path(component), "islands/Toggle.tsx")

    def test_explicit_island_false_wins(self):
        component = SprigComponent.from_source(
            "@Component({ island: false })\nexport class Static {}", '<button (click)="x()">x</button>', "static",
        )
        self.assertFalse(component.is_island)

    def test_injected_services(self):
        component = SprigComponent.from_source(TIMER_SOURCE, "<time>{{ clock.now() }}</time>", "timer")
        self.assertTrue(component.is_island)
        content = generate_component(component).content
        self.assertIn('import { getClockService } from "@/services/container.ts";', content)
        self.assertIn("  const clockService = getClockService();", content)
        self.assertIn("<time>{clockService.now()}</time>", content)
        self.assertIn("return clockService.now();", content)

    def test_style_import(self):
        component = SprigComponent.from_source("@Component({})\nexport class Badge {}", "<span />", "badge")
        content = generate_component(component, style_path="/static/css/components/Badge.css").content
        self.assertIn('import "/static/css/components/Badge.css";', content)
        self.assertIn("export default function Badge() {\n  return <span />;\n}", content)

    def test_projected_content(self):
        component = SprigComponent.from_source(
            "@Component({})\nexport class Card {\n  @Input() title: string;\n}",
            '<article><header><slot name="header" /></header><h2>{{ title }}</h2><ng-content></ng-content></article>',
            "card",
        )
        content = generate_component(component).content
        self.assertTrue(content.startswith('import type { ComponentChildren } from "preact";\n'))
        self.assertIn(
            "interface CardProps {\n  title: string;\n  children?: ComponentChildren;\n  header?: ComponentChildren;\n}",
            content,
        )
        self.assertIn("export default function Card(props: CardProps) {", content)
        self.assertIn("  const title = props.title;\n  const { children } = props;\n  const { header } = props;", content)
        self.assertIn("<article><header>{header}</header><h2>{title}</h2>{children}</article>", content)

    def test_default_slot_without_inputs(self):
        component = SprigComponent.from_source("@Component({})\nexport class Panel {}", "<section><slot /></section>", "panel")
        content = generate_component(component).content
        self.assertIn("interface PanelProps {\n  children?: ComponentChildren;\n}", content)
        self.assertIn("export default function Panel(props: PanelProps) {\n  const { children } = props;", content)
        self.assertIn("return <section>{children}</section>;", content)


class TestHelpers(unittest.TestCase):
    def test_signal_references(self):
        self.assertEqual(signal_references("{count}", ["count"]), "{count.value}")
        self.assertEqual(signal_references("{count.value}", ["count"]), "{count.value}")
        self.assertEqual(signal_references("{count()}", ["count"]), "{count()}")
        self.assertEqual(signal_references("{!open && x}", ["open"]), "{!open.value && x}")

    def test_service_references(self):
        dependencies = [SimpleNamespace(name="api", type="ApiService")]
        self.assertEqual(
            rewrite_service_references("{{ api.load() }} {{ this.api.name }} {{ rapi.x }}", dependencies),
            "{{ apiService.load() }} {{ apiService.name }} {{ rapi.x }}",
        )

    def test_plain_resolver(self):
        resolve = plain_resolver(
            [SimpleNamespace(property_name="class")],
            [SimpleNamespace(name="store", type="StoreService")],
        )
        self.assertEqual(resolve("class"), "className")
        self.assertEqual(resolve("store"), "storeService")
        self.assertEqual(resolve("other"), "other")


if __name__ == "__main__":
    unittest.main()
