"""Component vocabulary shared by the planner, validator, envelope and sandbox."""

UI_COMPONENTS: tuple[str, ...] = (
    "Button",
    "Card",
    "Chart",
    "Input",
    "Modal",
    "Navbar",
    "Sidebar",
    "Table",
    "Textarea",
)

LAYOUT_PRIMITIVES: tuple[str, ...] = (
    "Container",
    "Grid",
    "Inline",
    "Section",
    "Stack",
)

ICONS: tuple[str, ...] = (
    "Activity",
    "ArrowDown",
    "ArrowRight",
    "ArrowUp",
    "BarChart",
    "Behance",
    "Bell",
    "Briefcase",
    "Calendar",
    "Check",
    "ChevronRight",
    "Clock",
    "Cpu",
    "CreditCard",
    "Download",
    "Dribbble",
    "DollarSign",
    "ExternalLink",
    "Facebook",
    "Figma",
    "FileText",
    "Filter",
    "Github",
    "Globe",
    "Home",
    "Instagram",
    "LayoutDashboard",
    "LineChart",
    "Linkedin",
    "Mail",
    "Menu",
    "MessageSquare",
    "MoreVertical",
    "PieChart",
    "Plus",
    "Search",
    "Settings",
    "Share2",
    "Shield",
    "Target",
    "Trash2",
    "TrendingDown",
    "TrendingUp",
    "Twitter",
    "Users",
    "X",
    "Youtube",
    "Zap",
)

# Components a plan may name.
COMPONENT_WHITELIST: frozenset[str] = frozenset(UI_COMPONENTS + LAYOUT_PRIMITIVES)

# Capitalised JSX tags the strict validator accepts.
TAG_WHITELIST: frozenset[str] = COMPONENT_WHITELIST | frozenset(ICONS) | frozenset(
    f"{icon}Icon" for icon in ICONS
) | {"React.Fragment", "Fragment"}

ICON_PACKAGE = "lucide-react"

ALLOWED_IMPORTS: frozenset[str] = frozenset(
    ["react", ICON_PACKAGE]
    + [f"{prefix}layout-primitives/{name}" for prefix in ("../", "../../") for name in LAYOUT_PRIMITIVES]
    + [f"{prefix}components/{name}" for prefix in ("../", "../../") for name in UI_COMPONENTS]
)

REACT_HOOKS: frozenset[str] = frozenset({
    "useState",
    "useEffect",
    "useMemo",
    "useCallback",
    "useRef",
    "useContext",
    "useReducer",
    "useLayoutEffect",
})


def component_import_path(name: str) -> str:
    """Module path the generated code imports a vocabulary component from."""
    folder = "layout-primitives" if name in LAYOUT_PRIMITIVES else "components"
    return f"../{folder}/{name}"
