"""Shim capability table for the preview runtime.

Each entry maps a vocabulary name to the JavaScript source of a small
presentational stand-in (written against ``h = React.createElement``, no JSX,
so the table runs without a compile step). The preview renders a visual
approximation, not the production component.
"""

from core.vocabulary import ICONS

COMPONENT_SHIMS: dict[str, str] = {
    "Container": """({ children, className = "" }) =>
    h("div", { className: cx("max-w-7xl mx-auto px-4 sm:px-6 lg:px-8", className) }, children)""",
    "Grid": """({ cols = 1, gap = 4, children, className = "" }) =>
    h("div", { className: cx("grid grid-cols-1 md:grid-cols-" + cols, "gap-" + gap, className) }, children)""",
    "Stack": """({ gap = 4, children, className = "" }) =>
    h("div", { className: cx("flex flex-col", "gap-" + gap, className) }, children)""",
    "Inline": """({ gap = 4, children, className = "" }) =>
    h("div", { className: cx("flex flex-row flex-wrap", "gap-" + gap, className) }, children)""",
    "Section": """({ children, className = "" }) =>
    h("section", { className: cx("py-12", className) }, children)""",
    "Button": """({ variant = "primary", size = "md", className = "", children, ...props }) => {
    const variants = {
      primary: "bg-blue-600 text-white hover:bg-blue-700 shadow-md",
      secondary: "bg-neutral-100 text-neutral-900 hover:bg-neutral-200",
      outline: "border border-neutral-200 text-neutral-700 hover:bg-neutral-50",
      ghost: "text-neutral-600 hover:bg-neutral-100",
      danger: "bg-red-500 text-white hover:bg-red-600 shadow-md"
    };
    const sizes = { sm: "px-3 py-1.5 text-xs", md: "px-4 py-2 text-sm", lg: "px-6 py-3 text-base", icon: "p-2 aspect-square" };
    return h("button", { ...props, className: cx(
      "inline-flex items-center justify-center rounded-lg font-medium transition-all disabled:opacity-50",
      variants[variant] || variants.primary, sizes[size] || sizes.md, className) }, children);
  }""",
    "Card": """({ variant = "default", padding = "md", className = "", children }) => {
    const variants = {
      default: "bg-white border border-neutral-200 shadow-sm",
      bordered: "border border-neutral-200 bg-transparent",
      flat: "bg-neutral-50",
      glass: "backdrop-blur-md bg-white/10 border border-white/20 shadow-xl",
      neon: "bg-black/40 border border-blue-500/30 backdrop-blur-xl"
    };
    const paddings = { none: "", sm: "p-3", md: "p-5", lg: "p-8" };
    return h("div", { className: cx("rounded-xl overflow-hidden",
      variants[variant] || variants.default, paddings[padding] ?? paddings.md, className) }, children);
  }""",
    "Input": """({ variant = "default", error = false, className = "", ...props }) => {
    const variants = {
      default: "border border-neutral-200 focus:ring-2 focus:ring-blue-500",
      filled: "bg-neutral-100 border-transparent focus:bg-white"
    };
    return h("input", { ...props, className: cx("w-full px-3 py-2 rounded-lg outline-none text-sm",
      variants[variant] || variants.default, error && "border-red-500", className) });
  }""",
    "Textarea": """({ variant = "default", resize = true, className = "", ...props }) => {
    const variants = {
      default: "border border-neutral-200 focus:ring-2 focus:ring-blue-500",
      filled: "bg-neutral-100 border-transparent focus:bg-white"
    };
    return h("textarea", { ...props, className: cx("w-full px-3 py-2 rounded-lg outline-none text-sm min-h-[80px]",
      variants[variant] || variants.default, !resize && "resize-none", className) });
  }""",
    "Sidebar": """({ children, className = "" }) =>
    h("aside", { className: cx("w-64 h-full border-r border-neutral-200 bg-neutral-50/50 flex flex-col", className) }, children)""",
    "Navbar": """({ variant = "default", children, className = "" }) => {
    const variants = { default: "border-b border-neutral-200 bg-white", transparent: "bg-transparent" };
    return h("nav", { className: cx("h-16 flex items-center px-6", variants[variant] || variants.default, className) }, children);
  }""",
    "Table": """({ headers, data, children, className = "" }) => {
    const rows = Array.isArray(data) ? data : null;
    const cells = (row) => Array.isArray(row) ? row : (row && typeof row === "object" ? Object.values(row) : [row]);
    return h("div", { className: cx("overflow-hidden rounded-xl border border-neutral-200", className) },
      h("table", { className: "w-full text-left border-collapse text-sm" },
        headers ? h("thead", { className: "bg-neutral-50 border-b border-neutral-200" },
          h("tr", null, headers.map((head, i) =>
            h("th", { key: i, className: "px-4 py-3 font-semibold text-neutral-600 uppercase text-[10px]" }, head)))) : null,
        h("tbody", null, rows ? rows.map((row, i) =>
          h("tr", { key: i, className: "border-b border-neutral-100 last:border-0" },
            cells(row).map((cell, j) => h("td", { key: j, className: "px-4 py-3 text-neutral-700" },
              typeof cell === "object" && cell !== null && !React.isValidElement(cell) ? JSON.stringify(cell) : cell))))
          : children)));
  }""",
    "Modal": """({ isOpen, onClose, size = "md", children }) => {
    if (!isOpen) return null;
    const sizes = { sm: "max-w-sm", md: "max-w-md", lg: "max-w-lg", xl: "max-w-xl", full: "max-w-4xl" };
    return h("div", { className: "fixed inset-0 z-50 flex items-center justify-center p-4 bg-black/50" },
      h("div", { className: cx("bg-white rounded-2xl shadow-2xl p-6 w-full relative", sizes[size] || sizes.md) },
        children,
        h("button", { onClick: onClose, className: "absolute top-4 right-4 text-neutral-400 hover:text-neutral-600" }, "\\u00d7")));
  }""",
    "Chart": """({ type = "bar", data, title, height = "md", className = "" }) => {
    const heights = { sm: "h-48", md: "h-64", lg: "h-96" };
    const points = (Array.isArray(data) ? data : [
      { label: "Jan", value: 45 }, { label: "Feb", value: 52 }, { label: "Mar", value: 38 },
      { label: "Apr", value: 65 }, { label: "May", value: 48 }, { label: "Jun", value: 59 }
    ]).map((d) => (d && typeof d === "object")
      ? { label: String(d.label || d.name || d.date || ""), value: Number(d.value ?? d.y ?? 0) || 0 }
      : { label: "", value: Number(d) || 0 });
    const max = Math.max(1, ...points.map((p) => p.value));
    const last = Math.max(points.length - 1, 1);
    const path = points.map((p, i) => (i / last) * 100 + " " + (100 - (p.value / max) * 100)).join(" L ");
    return h("div", { className: cx("w-full bg-white rounded-2xl border border-neutral-200 p-6 flex flex-col",
        heights[height] || heights.md, className) },
      title ? h("h3", { className: "text-sm font-bold text-neutral-900 mb-6" }, title) : null,
      type === "bar"
        ? h("div", { className: "flex-1 flex items-end gap-3" }, points.map((p, i) =>
            h("div", { key: i, title: p.label + ": " + p.value,
              className: "flex-1 bg-gradient-to-t from-blue-600 to-blue-400 rounded-t-lg",
              style: { height: (p.value / max) * 100 + "%" } })))
        : h("svg", { className: "w-full flex-1", viewBox: "0 0 100 100", preserveAspectRatio: "none" },
            h("path", { d: "M " + path, fill: "none", stroke: "#3b82f6", strokeWidth: 3 })));
  }""",
}

ALIASES: dict[str, str] = {
    "DataTable": "Table",
    "LineChart": "Chart",
    "BarChart": "Chart",
    "PieChart": "Chart",
}

ICON_SHIM = """() => h("span", { className: "inline-block w-4 h-4 bg-neutral-200 rounded-sm flex-shrink-0" })"""

PLACEHOLDER_SHIM = """(name) => (props) => h("div", {
    className: cx("border border-dashed border-neutral-300 p-4 rounded-xl text-neutral-400 text-xs", props && props.className)
  }, h("div", { className: "font-bold mb-1 opacity-50 uppercase tracking-widest text-[8px]" }, name), props && props.children)"""

# Browser/JS globals generated code tends to reuse as component names.
COLLIDING_GLOBALS: frozenset[str] = frozenset({
    "Audio",
    "History",
    "Image",
    "Location",
    "Map",
    "Navigation",
    "Notification",
    "Option",
    "Plugin",
    "Range",
    "Selection",
    "Set",
    "Text",
    "URL",
    "Node",
    "Document",
    "Element",
    "Comment",
    "Storage",
    "Screen",
})

# Capitalised identifiers that are never component references.
JS_GLOBALS: frozenset[str] = frozenset({
    "React",
    "ReactDOM",
    "Math",
    "JSON",
    "Object",
    "Array",
    "String",
    "Number",
    "Boolean",
    "Date",
    "Promise",
    "Error",
    "TypeError",
    "RangeError",
    "SyntaxError",
    "Symbol",
    "RegExp",
    "Intl",
    "Infinity",
    "NaN",
    "BigInt",
    "Reflect",
    "Proxy",
    "WeakMap",
    "WeakSet",
    "Uint8Array",
    "Int32Array",
    "Float32Array",
    "Float64Array",
    "ArrayBuffer",
    "Blob",
    "FormData",
    "Headers",
    "AbortController",
    "IntersectionObserver",
    "ResizeObserver",
    "MutationObserver",
    "Event",
    "CustomEvent",
    "App",
})


def render_table() -> str:
    """
    JavaScript that fills ``__SHIMS`` from the capability table.

    Icons go in first so the Chart aliases (BarChart, LineChart, PieChart)
    win over the icon stand-ins of the same name.
    """
    lines = [f"const __icon = {ICON_SHIM};"]
    for icon in ICONS:
        lines.append(f'__SHIMS["{icon}"] = __icon; __SHIMS["{icon}Icon"] = __icon;')
    for name, source in COMPONENT_SHIMS.items():
        lines.append(f'__SHIMS["{name}"] = {source};')
    for alias, target in ALIASES.items():
        lines.append(f'__SHIMS["{alias}"] = __SHIMS["{target}"];')
    lines.append(f"const __placeholder = {PLACEHOLDER_SHIM};")
    return "\n".join(lines)
