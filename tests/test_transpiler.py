import unittest
from types import SimpleNamespace

from sprig.diagnostics import WarningCode
from sprig.metadata import DirectiveMetadata, PipeMetadata
from sprig.registry import DirectiveRegistry, PipeRegistry
from sprig.transpiler import as_return_expression, transform
from sprig.transpiler.attributes import (
    class_name_attribute,
    event_handler,
    interpolated_string,
    map_event_name,
    standard_attribute,
    style_attribute,
    transform_reserved_words,
    two_way_binding,
)


def jsx(template, **kwargs):
    return transform(template, **kwargs).jsx


def codes(result):
    return [warning.code for warning in result.warnings]


class TestAttributeHelpers(unittest.TestCase):
    def test_event_names(self):
        self.assertEqual(map_event_name("click"), "onClick")
        self.assertEqual(map_event_name("dblclick"), "onDblClick")
        self.assertEqual(map_event_name("customThing"), "onCustomThing")

    def test_event_handlers(self):
        self.assertEqual(event_handler("click", "save()"), "onClick={() => save()}")
        self.assertEqual(event_handler("click", "save"), "onClick={save}")
        self.assertEqual(event_handler("input", "update($event.target.value)"), "onInput={(e) => update(e.target.value)}")

    def test_two_way(self):
        self.assertEqual(
            two_way_binding("value", "name", "input"),
            ["value={name}", "onInput={(e) => name.value = e.target.value}"],
        )
        self.assertEqual(
            two_way_binding("checked", "done", "input"),
            ["checked={done}", "onChange={(e) => done.value = e.target.checked}"],
        )
        self.assertEqual(
            two_way_binding("value", "choice", "select"),
            ["value={choice}", "onChange={(e) => choice.value = e.target.value}"],
        )

    def test_class_names(self):
        self.assertIsNone(class_name_attribute())
        self.assertEqual(class_name_attribute("card"), 'className="card"')
        self.assertEqual(class_name_attribute(dynamic_class="classes"), "className={classes}")
        self.assertEqual(
            class_name_attribute("card", [("active", "isActive")]),
            'className={"card" + (isActive ? " active" : "")}',
        )
        self.assertEqual(class_name_attribute(None, [("on", "true")]), 'className="on"')

    def test_styles(self):
        self.assertEqual(
            style_attribute("font-size: 12px; color: red", [("width", "`${w}px`")]),
            'style={{fontSize: "12px", color: "red", width: `${w}px`}}',
        )
        self.assertIsNone(style_attribute(None, []))

    def test_standard_attributes(self):
        self.assertEqual(standard_attribute("for", "email"), 'htmlFor="email"')
        self.assertEqual(standard_attribute("colspan", "2"), "colSpan={2}")
        self.assertEqual(standard_attribute("disabled", None), "disabled")
        self.assertEqual(standard_attribute("title", 'say "hi"'), 'title={"say \\"hi\\""}')
        self.assertEqual(standard_attribute("alt", "Photo of {{ user.name }}"), "alt={`Photo of ${user.name}`}")

    def test_interpolated_string_escapes_backticks(self):
        self.assertEqual(interpolated_string("`a` {{ b }}"), "`\\`a\\` ${b}`")

    def test_reserved_words(self):
        self.assertEqual(transform_reserved_words("class"), "className")
        self.assertEqual(transform_reserved_words("item.class"), "item.class")
        self.assertEqual(transform_reserved_words("{ class: x }"), "{ class: x }")


class TestTransform(unittest.TestCase):
    def test_text_and_interpolation(self):
        self.assertEqual(jsx("<p>Hello {{ name }}</p>"), "<p>Hello {name}</p>")

    def test_text_escaping(self):
        self.assertEqual(jsx("<p>a { b }</p>"), '<p>a {"{"} b {"}"}</p>')

    def test_empty_template(self):
        self.assertEqual(jsx(""), "null")
        self.assertEqual(jsx("<!-- only a comment -->"), "null")

    def test_multiple_roots_use_fragment(self):
        self.assertEqual(jsx("<h1>A</h1>\n<p>B</p>"), "<>\n      <h1>A</h1>\n      <p>B</p>\n    </>")

    def test_bare_text_is_wrapped(self):
        self.assertEqual(jsx("Hello"), "<>Hello</>")

    def test_pipes_in_interpolation(self):
        result = transform("<span>{{ price | currency:'EUR' }}</span>")
        self.assertEqual(result.jsx, "<span>{formatCurrency(price, 'EUR')}</span>")
        self.assertEqual(result.pipe_helpers, ["formatCurrency"])

    def test_registered_pipe_is_recorded_once(self):
        registry = PipeRegistry()
        entry = registry.register(PipeMetadata(name="truncate", class_name="TruncatePipe"))
        result = transform("<p>{{ a | truncate:5 }} {{ b | truncate }}</p>", pipe_registry=registry)
        self.assertEqual(result.jsx, '<p>{truncate(a, 5)}{" "}{truncate(b)}</p>')
        self.assertEqual(result.used_pipes, [entry])
        self.assertEqual(entry.import_path, "@/pipes/truncate.ts")

    def test_if(self):
        self.assertEqual(jsx('<div *if="show">Hi</div>'), "{show && <div>Hi</div>}")
        self.assertEqual(jsx('<div *if="a > b">Hi</div>'), "{(a > b) && <div>Hi</div>}")

    def test_if_else(self):
        self.assertEqual(jsx('<div *if="ok" *else="Loading">Hi</div>'), "{ok ? <div>Hi</div> : <Loading />}")

    def test_orphan_else_and_empty_if(self):
        result = transform('<p *else="Other">x</p><p *if="">y</p>')
        self.assertEqual(codes(result), [WarningCode.ORPHAN_ELSE, WarningCode.EMPTY_IF_CONDITION])
        self.assertEqual(result.jsx, "<>\n      <p>x</p>\n      <p>y</p>\n    </>")

    def test_for_with_track_by(self):
        self.assertEqual(
            jsx('<ul><li *for="let item of items; trackBy: item.id">{{ item.name }}</li></ul>'),
            "<ul>{items.map((item) => <li key={item.id}>{item.name}</li>)}</ul>",
        )

    def test_for_with_index(self):
        self.assertEqual(
            jsx('<li *for="let item of items; index as i">{{ i }}</li>'),
            "{items.map((item, i: number) => <li key={i}>{i}</li>)}",
        )

    def test_second_loop_keyed_by_item_gets_prefix(self):
        result = jsx('<div><p *for="let a of xs">{{ a }}</p><p *for="let b of ys">{{ b }}</p></div>')
        self.assertIn('key={a}', result)
        self.assertIn('key={"2_" + b}', result)

    def test_if_and_for_on_one_element(self):
        self.assertEqual(
            jsx('<li *if="visible" *for="let x of xs">{{ x }}</li>'),
            "{visible && xs.map((x) => <li key={x}>{x}</li>)}",
        )

    def test_invalid_for_renders_plain_element(self):
        result = transform('<li *for="let x in xs">{{ x }}</li>')
        self.assertEqual(result.jsx, "<li>{x}</li>")
        self.assertEqual(codes(result), [WarningCode.INVALID_FOR_SYNTAX])

    def test_events(self):
        self.assertEqual(jsx('<button (click)="save()">Save</button>'), "<button onClick={() => save()}>Save</button>")
        self.assertEqual(jsx('<input (input)="update($event)">'), "<input onInput={(e) => update(e)} />")

    def test_two_way_binding(self):
        self.assertEqual(
            jsx('<input [(value)]="name">'),
            "<input value={name} onInput={(e) => name.value = e.target.value} />",
        )

    def test_property_binding(self):
        self.assertEqual(jsx('<img [src]="photo.url" alt="x">'), '<img src={photo.url} alt="x" />')

    def test_property_binding_with_pipe(self):
        self.assertEqual(jsx('<a [title]="name | uppercase">x</a>'), "<a title={name.toUpperCase()}>x</a>")

    def test_class_binding(self):
        self.assertEqual(
            jsx('<div class="card" [class.active]="isActive"></div>'),
            '<div className={"card" + (isActive ? " active" : "")} />',
        )

    def test_style_binding(self):
        self.assertEqual(jsx('<div [style.width.px]="w"></div>'), "<div style={{width: `${w}px`}} />")
        self.assertEqual(jsx('<div [style.background-color]="c"></div>'), "<div style={{backgroundColor: c}} />")

    def test_attribute_binding(self):
        self.assertEqual(jsx('<td [attr.aria-label]="label"></td>'), "<td aria-label={label} />")

    def test_attributes_keep_source_order(self):
        self.assertEqual(
            jsx('<a href="/x" [title]="t" (click)="go()">x</a>'),
            '<a href="/x" title={t} onClick={() => go()}>x</a>',
        )

    def test_empty_and_dangerous_bindings(self):
        result = transform('<div [title]="" (click)="" [innerHTML]="html"></div>')
        self.assertEqual(result.jsx, "<div innerHTML={html} />")
        self.assertEqual(
            codes(result),
            [WarningCode.EMPTY_BINDING_EXPRESSION, WarningCode.EMPTY_BINDING_EXPRESSION, WarningCode.DANGEROUS_BINDING],
        )

    def test_bind_this_is_stripped(self):
        self.assertEqual(jsx('<x-list [render]="renderItem.bind(this)"></x-list>'), "<XList render={renderItem} />")

    def test_template_refs(self):
        result = transform('<input #search type="text">')
        self.assertEqual(result.jsx, '<input ref={search as any} type="text" />')
        self.assertEqual(result.template_refs, ["search"])

    def test_outlet(self):
        result = transform("<main><Outlet /></main>")
        self.assertEqual(result.jsx, "<main><Component /></main>")
        self.assertTrue(result.has_outlet)

    def test_custom_tags_and_imports(self):
        known = [
            SimpleNamespace(class_name="StatusBadge", is_island=False),
            SimpleNamespace(class_name="LikeButton", is_island=True),
        ]
        result = transform(
            '<div><status-badge [status]="s"></status-badge><like-button /><mystery-box /></div>',
            known_components=known,
        )
        self.assertEqual(result.jsx, "<div><StatusBadge status={s} /><LikeButton /><MysteryBox /></div>")
        self.assertEqual(
            [item.statement for item in result.imports],
            [
                'import StatusBadge from "@/components/StatusBadge.tsx";',
                'import LikeButton from "@/islands/LikeButton.tsx";',
            ],
        )
        self.assertTrue(result.imports[1].is_island)

    def test_custom_directive_spread(self):
        registry = DirectiveRegistry()
        entry = registry.register(DirectiveMetadata(selector="*highlight", class_name="HighlightDirective"))
        result = transform("<p *highlight=\"'yellow'\">x</p>", directive_registry=registry)
        self.assertEqual(result.jsx, "<p {...applyHighlightDirective({}, 'yellow')}>x</p>")
        self.assertEqual(result.used_directives, [entry])

    def test_unknown_directive_is_ignored(self):
        result = transform("<p *tooltip=\"'hi'\">x</p>", directive_registry=DirectiveRegistry())
        self.assertEqual(result.jsx, "<p>x</p>")
        self.assertEqual(result.used_directives, [])
        self.assertEqual(codes(result), [WarningCode.UNKNOWN_DIRECTIVE])

    def test_parse_errors_are_reported(self):
        result = transform("<p>ok</p><div")
        self.assertEqual(len(result.errors), 1)

    def test_idempotent(self):
        directives = DirectiveRegistry()
        directives.register(DirectiveMetadata(selector="*highlight", class_name="HighlightDirective"))
        pipes = PipeRegistry()
        pipes.register(PipeMetadata(name="truncate", class_name="TruncatePipe"))
        known = [SimpleNamespace(class_name="UserCard", is_island=False)]
        template = (
            '<section *if="ready"><user-card *for="let u of users; trackBy: u.id" [user]="u" />'
            "<p *highlight=\"'red'\">{{ bio | truncate:40 | uppercase }}</p></section>"
        )

        first = transform(template, known, directives, pipes)
        second = transform(template, known, directives, pipes)
        self.assertEqual(first.jsx, second.jsx)
        self.assertEqual(first.imports, second.imports)
        self.assertEqual(first.used_pipes, second.used_pipes)
        self.assertEqual(first.used_directives, second.used_directives)

    def test_return_expression(self):
        self.assertEqual(as_return_expression("{a && <b />}"), "(a && <b />)")
        self.assertEqual(as_return_expression("<div />"), "<div />")


class TestAttributeInterpolation(unittest.TestCase):
    def test_pipes_inside_attribute_interpolation(self):
        self.assertEqual(jsx('<p title="{{ name | uppercase }}">a</p>'), "<p title={`${name.toUpperCase()}`}>a</p>")

    def test_helpers_are_recorded(self):
        result = transform("<a title=\"Price: {{ price | currency:'EUR' }}\">x</a>")
        self.assertEqual(result.jsx, "<a title={`Price: ${formatCurrency(price, 'EUR')}`}>x</a>")
        self.assertEqual(result.pipe_helpers, ["formatCurrency"])

    def test_registered_pipes_are_recorded(self):
        registry = PipeRegistry()
        entry = registry.register(PipeMetadata(name="truncate", class_name="TruncatePipe"))
        result = transform('<img alt="{{ caption | truncate:10 }}">', pipe_registry=registry)
        self.assertEqual(result.jsx, "<img alt={`${truncate(caption, 10)}`} />")
        self.assertEqual(result.used_pipes, [entry])


class TestSlots(unittest.TestCase):
    def test_default_slot(self):
        result = transform("<div><slot /></div>")
        self.assertEqual(result.jsx, "<div>{children}</div>")
        self.assertTrue(result.has_default_slot)
        self.assertEqual(result.named_slots, [])

    def test_ng_content_is_the_default_slot(self):
        result = transform("<div><ng-content></ng-content></div>")
        self.assertEqual(result.jsx, "<div>{children}</div>")
        self.assertEqual(result.imports, [])
        self.assertTrue(result.has_slots)

    def test_named_slots(self):
        result = transform(
            '<header><slot name="header" /></header>'
            '<ng-content select=".card-footer"></ng-content>'
            '<ng-content select="[slot=aside]" />'
        )
        self.assertEqual(result.named_slots, ["header", "cardFooter", "aside"])
        self.assertFalse(result.has_default_slot)
        self.assertIn("<header>{header}</header>", result.jsx)
        self.assertIn("{cardFooter}", result.jsx)
        self.assertIn("{aside}", result.jsx)

    def test_slot_in_layout_renders_the_page(self):
        result = transform("<main><slot /></main>", slot_context="layout")
        self.assertEqual(result.jsx, "<main><Component /></main>")
        self.assertTrue(result.has_outlet)
        self.assertFalse(result.has_slots)

    def test_no_slots(self):
        self.assertFalse(transform("<p>plain</p>").has_slots)


class TestMarkupWarnings(unittest.TestCase):
    def test_unclosed_tag(self):
        result = transform("<p>ok</p><div")
        self.assertEqual(codes(result), [WarningCode.UNCLOSED_TAG])

    def test_attribute_without_value(self):
        result = transform('<a href=>x</a>')
        self.assertEqual(len(result.errors), 1)
        self.assertEqual(codes(result), [WarningCode.MALFORMED_ATTRIBUTE])


if __name__ == "__main__":
    unittest.main()
