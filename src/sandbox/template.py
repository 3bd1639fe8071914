"""Preview document template.

The document runs inside an ``<iframe sandbox="allow-scripts">`` (no
``allow-same-origin``), so it gets an opaque origin and cannot reach the
host. Everything here is plain JavaScript: the error reporting is installed
before any user code is touched, and the user module is carried as a JSON
string and compiled with Babel inside a ``try``. A syntax error therefore
lands in the error block instead of killing the script.
"""

# iframe sandbox flags the host must use for preview documents
SANDBOX_FLAGS = "allow-scripts"

CONTENT_SECURITY_POLICY = (
    "default-src 'none'; "
    "script-src 'unsafe-inline' 'unsafe-eval' https://unpkg.com https://cdn.tailwindcss.com; "
    "style-src 'unsafe-inline'; "
    "img-src * data: blob:; "
    "font-src * data:; "
    "connect-src 'none'"
)

STATUS_MESSAGE_TYPE = "preview-status"

HEAD = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <meta http-equiv="Content-Security-Policy" content="__CSP__">
  <style>
    body { margin: 0; padding: 0; background: transparent; font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Arial, sans-serif; }
    #root { min-height: 100vh; display: flex; flex-direction: column; }
    .preview-error { margin: 16px; padding: 20px; color: #b91c1c; background: #fee2e2; border: 1px solid #fecaca; border-radius: 8px; font-family: ui-monospace, monospace; font-size: 12px; white-space: pre-wrap; word-break: break-word; }
    .preview-error strong { display: block; margin-bottom: 8px; font-size: 13px; }
  </style>
</head>
<body>
  <div id="root"></div>
  <script>
    var __GENERATION = __GENERATION_VALUE__;
    var __state = "compiling";
    var __root = null;

    function __report(state, message) {
      if (__state === "compile_error" || __state === "runtime_error") return;
      __state = state;
      try {
        window.parent.postMessage({ type: "__STATUS_TYPE__", generation: __GENERATION, state: state, message: message || "" }, "*");
      } catch (e) {}
    }

    function __showError(title, err) {
      var message = (err && (err.message || String(err))) || "Unknown error";
      var container = document.getElementById("root");
      if (__root) { try { __root.unmount(); } catch (e) {} __root = null; }
      if (container) {
        var block = document.createElement("div");
        block.className = "preview-error";
        var heading = document.createElement("strong");
        heading.textContent = title + ":";
        var body = document.createElement("div");
        body.textContent = message;
        block.appendChild(heading);
        block.appendChild(body);
        container.replaceChildren(block);
      }
      __report(title === "Runtime Error" ? "runtime_error" : "compile_error", message);
    }

    window.onerror = function (msg, url, lineNo, columnNo, error) {
      console.error("Preview runtime error:", msg, error);
      __showError("Runtime Error", error || { message: String(msg) + (lineNo ? " (line " + lineNo + ")" : "") });
      return true;
    };
    window.addEventListener("unhandledrejection", function (event) {
      __showError("Runtime Error", event.reason);
    });
  </script>
  <script src="https://unpkg.com/react@18/umd/react.development.js" crossorigin></script>
  <script src="https://unpkg.com/react-dom@18/umd/react-dom.development.js" crossorigin></script>
  <script src="https://unpkg.com/@babel/standalone/babel.min.js"></script>
  <script src="https://cdn.tailwindcss.com"></script>
"""

RUNTIME = """  <script>
  (function () {
    if (typeof React === "undefined" || typeof ReactDOM === "undefined" || typeof Babel === "undefined") {
      __showError("Compilation Error", { message: "Preview runtime (React/Babel) failed to load." });
      return;
    }

    var h = React.createElement;
    var cx = function () { return Array.prototype.filter.call(arguments, Boolean).join(" "); };
    var __SHIMS = Object.create(null);
__SHIM_TABLE__

    function __shim(name) {
      if (name === "*") {
        return new Proxy({}, { get: function (t, key) { return typeof key === "string" ? __shim(key) : undefined; } });
      }
      if (!__SHIMS[name]) __SHIMS[name] = __placeholder(name);
      return __SHIMS[name];
    }

    class __Boundary extends React.Component {
      constructor(props) { super(props); this.state = { failed: false }; }
      static getDerivedStateFromError() { return { failed: true }; }
      componentDidCatch(error) { __showError("Runtime Error", error); }
      render() { return this.state.failed ? null : this.props.children; }
    }

    var __USER_SOURCE = __USER_SOURCE_JSON__;
    var __BINDINGS = __BINDINGS_JSON__;

    try {
      var prelude = __BINDINGS.map(function (pair) {
        return "var " + pair[0] + " = __shim(" + JSON.stringify(pair[1]) + ");";
      }).join("\\n");
      var epilogue = "\\nreturn (window.App !== undefined ? window.App : null)"
        + " || (module.exports && (module.exports.default || (typeof module.exports === 'function' ? module.exports : null)))"
        + " || (typeof App !== 'undefined' ? App : null);";
      // User code gets its own block so it may redeclare hooks or shimmed names.
      var compiled = Babel.transform(prelude + "\\n{\\n" + __USER_SOURCE + epilogue + "\\n}", {
        filename: "App.tsx",
        sourceType: "script",
        presets: [["typescript", { isTSX: true, allExtensions: true }], "react"],
        parserOpts: { allowReturnOutsideFunction: true }
      }).code;

      var module = { exports: {} };
      var run = new Function(
        "React", "ReactDOM", "__shim", "module", "exports", "require",
        "useState", "useEffect", "useMemo", "useCallback", "useRef", "useContext", "useReducer", "useLayoutEffect",
        compiled
      );
      var exported = run(
        React, ReactDOM, __shim, module, module.exports, function (name) { return __shim(String(name)); },
        React.useState, React.useEffect, React.useMemo, React.useCallback, React.useRef, React.useContext, React.useReducer, React.useLayoutEffect
      );

      var container = document.getElementById("root");
      var element;
      if (!exported) {
        element = h("div", { className: "p-8 text-red-500 font-bold" }, "Error: no valid export found ('App' component or default export).");
      } else if (React.isValidElement(exported)) {
        element = exported;
      } else if (typeof exported === "function" || (typeof exported === "object" && exported.$$typeof)) {
        element = h(exported);
      } else {
        element = h("div", { className: "p-8 text-neutral-500" },
          h("h2", { className: "text-lg font-bold text-red-500 mb-2" }, "Mount Error"),
          h("p", { className: "text-sm" }, "Exported value is not a valid React component or element (got " + typeof exported + ")."));
      }

      __root = ReactDOM.createRoot(container);
      __root.render(h(__Boundary, null, element));
      setTimeout(function () { __report(exported ? "mounted" : "compile_error", exported ? "" : "no valid export found"); }, 0);
    } catch (err) {
      console.error("Compilation/Mount Error:", err);
      __showError("Compilation Error", err);
    }
  })();
  </script>
</body>
</html>
"""

FALLBACK = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta http-equiv="Content-Security-Policy" content="__CSP__">
  <style>
    .preview-error { margin: 16px; padding: 20px; color: #b91c1c; background: #fee2e2; border: 1px solid #fecaca; border-radius: 8px; font-family: ui-monospace, monospace; font-size: 12px; white-space: pre-wrap; }
  </style>
</head>
<body>
  <div id="root"><div class="preview-error"><strong>Compilation Error:</strong>
__MESSAGE__</div></div>
  <script>
    try {
      window.parent.postMessage({ type: "__STATUS_TYPE__", generation: __GENERATION_VALUE__, state: "compile_error", message: __MESSAGE_JSON__ }, "*");
    } catch (e) {}
  </script>
</body>
</html>
"""
