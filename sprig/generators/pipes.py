"""Wrapper modules for ``@Pipe`` classes, their index and the built-in pipe helpers."""

from .base import GeneratedFile, source_import_path

EMPTY_INDEX = "// No custom pipes\nexport {};\n"

HELPERS_MODULE = """// Runtime helpers for the built-in pipes
import { useSignal } from "@preact/signals";
import { useEffect } from "preact/hooks";

export function toTitleCase(value: unknown): string {
  return String(value ?? "").replace(/\\w\\S*/g, (word) => word.charAt(0).toUpperCase() + word.slice(1).toLowerCase());
}

export function formatCurrency(value: unknown, currency = "USD"): string {
  return new Intl.NumberFormat(undefined, { style: "currency", currency }).format(Number(value));
}

export function formatDate(value: unknown, format?: Intl.DateTimeFormatOptions): string {
  return new Intl.DateTimeFormat(undefined, format).format(new Date(value as string | number | Date));
}

export function formatNumber(value: unknown, digits: number): string {
  return Number(value).toFixed(digits);
}

export function formatPercent(value: unknown): string {
  return new Intl.NumberFormat(undefined, { style: "percent" }).format(Number(value));
}

export function asyncPipe<T>(value: Promise<T> | T): T | undefined {
  const result = useSignal<T | undefined>(undefined);
  useEffect(() => {
    Promise.resolve(value).then((resolved) => {
      result.value = resolved;
    });
  }, [value]);
  return result.value;
}
"""


def generate_pipe(pipe, output_dir="pipes", import_alias="@"):
    name = pipe.metadata.name
    class_name = pipe.metadata.class_name
    relative_source = pipe.relative_source
    content = f'''/**
 * Generated wrapper for {class_name}
 * Source: {relative_source}
 */

import {{ {class_name} }} from "{source_import_path(relative_source, import_alias)}";

const _{name}Instance = new {class_name}();

export function {name}(value: unknown, ...args: unknown[]): unknown {{
  return _{name}Instance.transform(value, ...args);
}}
'''
    return GeneratedFile(f"{output_dir}/{name}.ts", content)


def generate_pipes_index(pipes, output_dir="pipes"):
    if not pipes:
        return GeneratedFile(f"{output_dir}/mod.ts", EMPTY_INDEX)
    lines = [f'export {{ {pipe.metadata.name} }} from "./{pipe.metadata.name}.ts";' for pipe in pipes]
    return GeneratedFile(f"{output_dir}/mod.ts", "\n".join(lines) + "\n")


def generate_pipe_helpers(output_dir="pipes"):
    return GeneratedFile(f"{output_dir}/helpers.ts", HELPERS_MODULE)
