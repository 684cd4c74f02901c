"""
Client-side emitters: one C++ class per interface wrapping a wl_proxy and
its event listener.
"""

from .common import (
    array_marshaling,
    call_args,
    emitted_interfaces,
    event_signature,
    handler_signature,
    inbound_value,
    is_hidden_new_id,
    local_include,
    outbound_value,
    protocol_file_stem,
    write_enums,
    write_preamble,
)
from .model import Event, Interface, Protocol, new_id_argument
from .naming import to_identifier_case
from .options import GeneratorOptions, Role, default_header_name
from .writer import CodeWriter

NAMESPACE = "Wayland::Client"
ROLE = Role.CLIENT


def request_return_type(event: Event) -> str:
    """Return type of a request wrapper, taken from its first new_id."""
    new_id = new_id_argument(event.arguments)
    if new_id is None:
        return "void"
    if not new_id.interface:
        return "void *"
    return f"struct ::{new_id.interface} *"


def _returned(type_name: str, rest: str) -> str:
    # "void *" + "x" -> "void *x"; "void" + "x" -> "void x"
    if type_name.endswith("*"):
        return type_name + rest
    return f"{type_name} {rest}"


# ── Header ───────────────────────────────────────────────────────────

def _class_decl(w: CodeWriter, iface: Interface):
    cls = to_identifier_case(iface.name, True)
    name = iface.name

    w.lines(
        f"    class {cls} {{",
        "    public:",
        f"        {cls}(struct ::wl_registry *registry, uint32_t id, int version);",
        f"        {cls}(struct ::{name} *object);",
        f"        {cls}();",
        "",
        f"        virtual ~{cls}();",
        "",
        "        void init(struct ::wl_registry *registry, uint32_t id, int version);",
        f"        void init(struct ::{name} *object);",
        "",
        f"        struct ::{name} *object() {{ return m_{name}; }}",
        f"        const struct ::{name} *object() const {{ return m_{name}; }}",
        f"        static {cls} *fromObject(struct ::{name} *object);",
        "",
        "        bool isInitialized() const;",
        "",
        "        uint32_t version() const;",
        "        static const struct ::wl_interface *interface();",
    )

    write_enums(w, iface.enums)

    if iface.requests:
        w.line()
        for e in iface.requests:
            w.line("        " + _returned(request_return_type(e), event_signature(e, ROLE) + ";"))

    if iface.events:
        w.line()
        w.line("    protected:")
        for e in iface.events:
            w.line(f"        virtual void {event_signature(e, ROLE)};")

    w.line()
    w.line("    private:")
    if iface.events:
        w.line("        void init_listener();")
        w.line(f"        static const struct {name}_listener m_{name}_listener;")
        for e in iface.events:
            w.line(f"        static void {handler_signature(e, ROLE, name)};")

    w.line(f"        struct ::{name} *m_{name};")
    w.line("    };")


def emit_client_h(protocol: Protocol, options: GeneratorOptions) -> str:
    """Generate the client header: one proxy wrapper class per interface."""
    w = CodeWriter()
    write_preamble(w, options, header=True)

    stem = protocol_file_stem(protocol.name)
    w.line(local_include(f"{stem}-client.h", options))
    w.line()
    w.line("struct wl_registry;")
    w.line()
    w.line("namespace Wayland {")
    w.line("namespace Client {")

    first = True
    for iface in emitted_interfaces(protocol.interfaces, ROLE):
        if not first:
            w.line()
        first = False
        _class_decl(w, iface)

    w.line("}")
    w.line("}")
    return w.text()


# ── Implementation ───────────────────────────────────────────────────

def _write_registry_bind(w: CodeWriter):
    # wl_registry_bind belongs to the core protocol header; go through
    # the proxy API directly instead.
    w.block(
        "static inline void *wlRegistryBind(struct ::wl_registry *registry, uint32_t name, "
        "const struct ::wl_interface *interface, uint32_t version)",
        [
            "const uint32_t bindOpCode = 0;",
            "return (void *) wl_proxy_marshal_constructor_versioned((struct wl_proxy *) registry, "
            "bindOpCode, interface, version, name, interface->name, version, nullptr);",
        ],
    )


def _lifecycle_defs(w: CodeWriter, iface: Interface, cls: str):
    q = f"{NAMESPACE}::{cls}"
    name = iface.name
    listen = ["init_listener();"] if iface.events else []

    w.block(f"{q}::{cls}(struct ::wl_registry *registry, uint32_t id, int version)",
            ["init(registry, id, version);"])
    w.line()
    w.block(f"{q}::{cls}(struct ::{name} *obj)\n    : m_{name}(obj)", listen)
    w.line()
    w.block(f"{q}::{cls}()\n    : m_{name}(nullptr)", [])
    w.line()
    w.block(f"{q}::~{cls}()", [])
    w.line()
    w.block(f"void {q}::init(struct ::wl_registry *registry, uint32_t id, int version)", [
        f"m_{name} = static_cast<struct ::{name} *>(wlRegistryBind(registry, id, &{name}_interface, version));",
        *listen,
    ])
    w.line()
    w.block(f"void {q}::init(struct ::{name} *obj)", [f"m_{name} = obj;", *listen])
    w.line()

    body = []
    if iface.events:
        body.extend([
            f"if (wl_proxy_get_listener((struct ::wl_proxy *)object) != (void *)&m_{name}_listener)",
            "    return nullptr;",
        ])
    body.append(f"return static_cast<{q} *>({name}_get_user_data(object));")
    w.block(f"{q} *{q}::fromObject(struct ::{name} *object)", body)
    w.line()
    w.block(f"bool {q}::isInitialized() const", [f"return m_{name} != nullptr;"])
    w.line()
    w.block(f"uint32_t {q}::version() const",
            [f"return wl_proxy_get_version(reinterpret_cast<wl_proxy*>(m_{name}));"])
    w.line()
    w.block(f"const struct wl_interface *{q}::interface()", [f"return &::{name}_interface;"])


def _request_defs(w: CodeWriter, iface: Interface, cls: str):
    q = f"{NAMESPACE}::{cls}"
    name = iface.name

    for e in iface.requests:
        c_args = [f"m_{name}"]
        for a in e.arguments:
            if a.type == "new_id":
                if not a.interface:
                    c_args.append("interface, version")
                continue
            c_args.append(outbound_value(a))

        ret = request_return_type(e)
        call = f"::{name}_{e.name}{call_args(c_args)};"

        body = array_marshaling(e.arguments)
        if ret == "void":
            body.append(call)
            if e.is_destructor:
                body.append(f"m_{name} = nullptr;")
        elif e.is_destructor:
            # The proxy is gone once the call returns; clear it before returning.
            body.extend([
                f"{_returned(ret, 'result')} = {call}",
                f"m_{name} = nullptr;",
                "return result;",
            ])
        else:
            body.append("return " + call)

        w.line()
        w.block(_returned(ret, f"{q}::{event_signature(e, ROLE)}"), body)


def _event_defs(w: CodeWriter, iface: Interface, cls: str):
    q = f"{NAMESPACE}::{cls}"
    name = iface.name

    w.line()
    for e in iface.events:
        hook = to_identifier_case(e.name, False)
        forward = [inbound_value(a) for a in e.arguments
                   if not is_hidden_new_id(a, e, ROLE)]

        w.block(f"void {q}::{event_signature(e, ROLE, omit_names=True)}", [])
        w.line()
        w.block(f"void {q}::{handler_signature(e, ROLE, name)}",
                [f"static_cast<{q} *>(data)->{hook}{call_args(forward)};"])
        w.line()

    # Positional: must line up with the event order of <iface>_listener.
    w.line(f"const struct {name}_listener {q}::m_{name}_listener = {{")
    w.line(",\n".join(f"    {q}::handle{to_identifier_case(e.name, True)}" for e in iface.events))
    w.line("};")
    w.line()
    w.block(f"void {q}::init_listener()",
            [f"{name}_add_listener(m_{name}, &m_{name}_listener, this);"])


def emit_client_cpp(protocol: Protocol, options: GeneratorOptions) -> str:
    """Generate the client implementation for every wrapped interface."""
    w = CodeWriter()
    write_preamble(w, options, header=False)

    stem = protocol_file_stem(protocol.name)
    header_name = options.header_name or default_header_name(protocol.name, ROLE)
    w.line(local_include(f"{stem}-client.h", options))
    w.line(local_include(header_name, options))
    w.line()
    _write_registry_bind(w)

    for iface in emitted_interfaces(protocol.interfaces, ROLE):
        cls = to_identifier_case(iface.name, True)

        w.line()
        _lifecycle_defs(w, iface, cls)
        _request_defs(w, iface, cls)
        if iface.events:
            _event_defs(w, iface, cls)

    return w.text()
