"""The service container module components resolve injected services from."""

from ..naming import lower_first
from .base import GeneratedFile, source_import_path

CONTAINER_PATH = "services/container.ts"


def generate_service_container(services, import_alias="@"):
    """``get<Service>()`` resolvers honouring each service's scope, plus ``initializeServices()``."""
    lines = []
    for service in services:
        class_name = service.metadata.class_name
        lines.append(f'import {{ {class_name} }} from "{source_import_path(service.relative_source, import_alias)}";')
    if lines:
        lines.append("")
    lines.append("const instances = new Map<unknown, unknown>();")
    lines.append("")
    lines.append("function singleton<T>(key: new () => T): T {")
    lines.append("  if (!instances.has(key)) {")
    lines.append("    instances.set(key, new key());")
    lines.append("  }")
    lines.append("  return instances.get(key) as T;")
    lines.append("}")
    lines.append("")

    for service in services:
        class_name = service.metadata.class_name
        lines.append(f"export function get{class_name}(): {class_name} {{")
        if service.metadata.scope == "transient":
            lines.append(f"  return new {class_name}();")
        else:
            lines.append(f"  return singleton({class_name});")
        lines.append("}")
        lines.append("")

    lines.append("export async function initializeServices(): Promise<void> {")
    for service in services:
        if not service.metadata.on_startup:
            continue
        class_name = service.metadata.class_name
        var = lower_first(class_name)
        lines.append(f"  const {var} = get{class_name}();")
        for method in service.metadata.on_startup:
            lines.append(f"  await {var}.{method}();")
    lines.append("}")
    lines.append("")
    return GeneratedFile(CONTAINER_PATH, "\n".join(lines))
