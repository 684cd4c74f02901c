"""
Server-side emitters: one C++ class per interface wrapping wl_resource,
wl_global and the request dispatch table.
"""

from .common import (
    array_marshaling,
    call_args,
    emitted_interfaces,
    event_signature,
    handler_signature,
    inbound_value,
    local_include,
    outbound_value,
    protocol_file_stem,
    write_enums,
    write_preamble,
)
from .model import Interface, Protocol
from .naming import strip_interface_prefix, to_identifier_case
from .options import GeneratorOptions, Role, default_header_name
from .writer import CodeWriter

NAMESPACE = "Wayland::Server"
ROLE = Role.SERVER


# ── Header ───────────────────────────────────────────────────────────

def _class_decl(w: CodeWriter, iface: Interface, options: GeneratorOptions):
    cls = to_identifier_case(iface.name, True)
    obj = strip_interface_prefix(iface.name, False, options.prefix) + "Object"

    w.lines(
        f"    class {cls} {{",
        "    public:",
        f"        {cls}(struct ::wl_client *client, uint32_t id, int version);",
        f"        {cls}(struct ::wl_display *display, int version);",
        f"        {cls}(struct ::wl_resource *resource);",
        f"        {cls}();",
        "",
        f"        virtual ~{cls}();",
        "",
        "        class Resource {",
        "        public:",
        f"            Resource() : {obj}(nullptr), handle(nullptr) {{}}",
        "            virtual ~Resource() {}",
        "",
        f"            {cls} *{obj};",
        f"            {cls} *object() {{ return {obj}; }}",
        "            struct ::wl_resource *handle;",
        "",
        "            struct ::wl_client *client() const { return wl_resource_get_client(handle); }",
        "            int version() const { return wl_resource_get_version(handle); }",
        "",
        "            static Resource *fromResource(struct ::wl_resource *resource);",
        "        };",
        "",
        "        void init(struct ::wl_client *client, uint32_t id, int version);",
        "        void init(struct ::wl_display *display, int version);",
        "        void init(struct ::wl_resource *resource);",
        "",
        "        Resource *add(struct ::wl_client *client, int version);",
        "        Resource *add(struct ::wl_client *client, uint32_t id, int version);",
        "",
        "        Resource *resource() { return m_resource; }",
        "        const Resource *resource() const { return m_resource; }",
        "",
        "        std::multimap<struct ::wl_client*, Resource*> resourceMap() { return m_resource_map; }",
        "        const std::multimap<struct ::wl_client*, Resource*> resourceMap() const { return m_resource_map; }",
        "",
        "        bool isGlobal() const { return m_global != nullptr; }",
        "        bool isResource() const { return m_resource != nullptr; }",
        "",
        "        static const struct ::wl_interface *interface();",
        "        static std::string interfaceName() { return interface()->name; }",
        "        static int interfaceVersion() { return interface()->version; }",
    )

    write_enums(w, iface.enums)

    if iface.events:
        w.line()
        for e in iface.events:
            w.line(f"        void send{event_signature(e, ROLE, capitalize=True)};")
            w.line(f"        void send{event_signature(e, ROLE, with_resource=True, capitalize=True)};")

    w.lines(
        "",
        "    protected:",
        "        virtual Resource *allocate();",
        "",
        "        virtual void bindResource(Resource *resource);",
        "        virtual void destroyResource(Resource *resource);",
    )

    if iface.requests:
        w.line()
        for e in iface.requests:
            w.line(f"        virtual void {event_signature(e, ROLE)};")

    w.lines(
        "",
        "    private:",
        "        static void bind_func(struct ::wl_client *client, void *data, uint32_t version, uint32_t id);",
        "        static void destroy_func(struct ::wl_resource *client_resource);",
        "        static void display_destroy_func(struct ::wl_listener *listener, void *data);",
        "",
        "        Resource *bind(struct ::wl_client *client, uint32_t id, int version);",
        "        Resource *bind(struct ::wl_resource *handle);",
    )

    if iface.requests:
        w.line()
        w.line(f"        static const struct ::{iface.name}_interface m_{iface.name}_interface;")
        w.line()
        for e in iface.requests:
            w.line(f"        static void {handler_signature(e, ROLE, cls)};")

    w.lines(
        "",
        "        std::multimap<struct ::wl_client*, Resource*> m_resource_map;",
        "        Resource *m_resource = nullptr;",
        "        struct ::wl_global *m_global = nullptr;",
        "        struct DisplayDestroyedListener : ::wl_listener {",
        f"            {cls} *parent;",
        "        };",
        "        DisplayDestroyedListener m_displayDestroyedListener;",
        "    };",
    )


def emit_server_h(protocol: Protocol, options: GeneratorOptions) -> str:
    """Generate the server header: one class declaration per interface."""
    w = CodeWriter()
    write_preamble(w, options, header=True)

    stem = protocol_file_stem(protocol.name)
    w.line('#include "wayland-server-core.h"')
    w.line(local_include(f"{stem}-server.h", options))
    w.line()
    w.line("#include <map>")
    w.line("#include <utility>")
    w.line()
    w.line("namespace Wayland {")
    w.line("namespace Server {")

    first = True
    for iface in emitted_interfaces(protocol.interfaces, ROLE):
        if not first:
            w.line()
        first = False
        _class_decl(w, iface, options)

    w.line("}")
    w.line("}")
    return w.text()


# ── Implementation ───────────────────────────────────────────────────

def _lifecycle_defs(w: CodeWriter, iface: Interface, cls: str, obj: str):
    q = f"{NAMESPACE}::{cls}"
    table = f"&m_{iface.name}_interface" if iface.requests else "nullptr"

    w.block(f"{q}::{cls}(struct ::wl_client *client, uint32_t id, int version)",
            ["m_resource_map.clear();", "init(client, id, version);"])
    w.line()
    w.block(f"{q}::{cls}(struct ::wl_display *display, int version)",
            ["m_resource_map.clear();", "init(display, version);"])
    w.line()
    w.block(f"{q}::{cls}(struct ::wl_resource *resource)",
            ["m_resource_map.clear();", "init(resource);"])
    w.line()
    w.block(f"{q}::{cls}()", ["m_resource_map.clear();"])
    w.line()

    # Bound resources outlive this object; only drop their back-reference.
    w.block(f"{q}::~{cls}()", [
        "for (auto &entry : m_resource_map) {",
        f"    entry.second->{obj} = nullptr;",
        "}",
        "",
        "if (m_resource)",
        f"    m_resource->{obj} = nullptr;",
        "",
        "if (m_global) {",
        "    wl_global_destroy(m_global);",
        "    wl_list_remove(&m_displayDestroyedListener.link);",
        "}",
    ])
    w.line()

    w.block(f"void {q}::init(struct ::wl_client *client, uint32_t id, int version)",
            ["m_resource = bind(client, id, version);"])
    w.line()
    w.block(f"void {q}::init(struct ::wl_resource *resource)",
            ["m_resource = bind(resource);"])
    w.line()
    w.block(f"{q}::Resource *{q}::add(struct ::wl_client *client, int version)", [
        "Resource *resource = bind(client, 0, version);",
        "m_resource_map.insert(std::pair{client, resource});",
        "return resource;",
    ])
    w.line()
    w.block(f"{q}::Resource *{q}::add(struct ::wl_client *client, uint32_t id, int version)", [
        "Resource *resource = bind(client, id, version);",
        "m_resource_map.insert(std::pair{client, resource});",
        "return resource;",
    ])
    w.line()
    w.block(f"void {q}::init(struct ::wl_display *display, int version)", [
        f"m_global = wl_global_create(display, &::{iface.name}_interface, version, this, bind_func);",
        f"m_displayDestroyedListener.notify = {cls}::display_destroy_func;",
        "m_displayDestroyedListener.parent = this;",
        "wl_display_add_destroy_listener(display, &m_displayDestroyedListener);",
    ])
    w.line()
    w.block(f"const struct wl_interface *{q}::interface()",
            [f"return &::{iface.name}_interface;"])
    w.line()
    w.block(f"{q}::Resource *{q}::allocate()", ["return new Resource;"])
    w.line()
    w.block(f"void {q}::bindResource(Resource *)", [])
    w.line()
    w.block(f"void {q}::destroyResource(Resource *)", [])
    w.line()
    w.block(f"void {q}::bind_func(struct ::wl_client *client, void *data, uint32_t version, uint32_t id)", [
        f"{cls} *that = static_cast<{cls} *>(data);",
        "that->add(client, id, version);",
    ])
    w.line()
    w.block(f"void {q}::display_destroy_func(struct ::wl_listener *listener, void *)", [
        f"{cls} *that = static_cast<{cls}::DisplayDestroyedListener *>(listener)->parent;",
        "that->m_global = nullptr;",
    ])
    w.line()
    w.block(f"void {q}::destroy_func(struct ::wl_resource *client_resource)", [
        "Resource *resource = Resource::fromResource(client_resource);",
        f"{cls} *that = resource->{obj};",
        "if (that) {",
        "    auto it = that->m_resource_map.begin();",
        "    while (it != that->m_resource_map.end()) {",
        "        if (it->second == resource) {",
        "            it = that->m_resource_map.erase(it);",
        "        }",
        "        else {",
        "            ++it;",
        "        }",
        "    }",
        "    that->destroyResource(resource);",
        "",
        f"    that = resource->{obj};",
        "    if (that && that->m_resource == resource)",
        "        that->m_resource = nullptr;",
        "}",
        "delete resource;",
    ])
    w.line()
    w.block(f"{q}::Resource *{q}::bind(struct ::wl_client *client, uint32_t id, int version)", [
        f"struct ::wl_resource *handle = wl_resource_create(client, &::{iface.name}_interface, version, id);",
        "return bind(handle);",
    ])
    w.line()
    w.block(f"{q}::Resource *{q}::bind(struct ::wl_resource *handle)", [
        "Resource *resource = allocate();",
        f"resource->{obj} = this;",
        "",
        f"wl_resource_set_implementation(handle, {table}, resource, destroy_func);",
        "resource->handle = handle;",
        "bindResource(resource);",
        "return resource;",
    ])
    w.line()
    w.block(f"{q}::Resource *{q}::Resource::fromResource(struct ::wl_resource *resource)", [
        "if (!resource)",
        "    return nullptr;",
        f"if (wl_resource_instance_of(resource, &::{iface.name}_interface, {table}))",
        "    return static_cast<Resource *>(wl_resource_get_user_data(resource));",
        "return nullptr;",
    ])


def _request_defs(w: CodeWriter, iface: Interface, cls: str, obj: str):
    q = f"{NAMESPACE}::{cls}"

    # Positional: must line up with the request order of <iface>_interface.
    w.line()
    w.line(f"const struct ::{iface.name}_interface {q}::m_{iface.name}_interface = {{")
    handlers = [f"    {q}::handle{to_identifier_case(e.name, True)}" for e in iface.requests]
    w.line(",\n".join(handlers))
    w.line("};")

    for e in iface.requests:
        w.line()
        w.block(f"void {q}::{event_signature(e, ROLE, omit_names=True)}", [])

    for e in iface.requests:
        w.line()
        guard = [f"if (!r->{obj}) {{"]
        if e.is_destructor:
            guard.append("    wl_resource_destroy(resource);")
        guard.extend(["    return;", "}"])

        args = ["r"] + [inbound_value(a) for a in e.arguments]
        hook = to_identifier_case(e.name, False)
        w.block(f"void {q}::{handler_signature(e, ROLE, cls)}", [
            "Resource *r = Resource::fromResource(resource);",
            *guard,
            f"static_cast<{cls} *>(r->{obj})->{hook}{call_args(args)};",
        ])


def _event_defs(w: CodeWriter, iface: Interface, cls: str):
    q = f"{NAMESPACE}::{cls}"

    for e in iface.events:
        send = "send" + to_identifier_case(e.name, True)
        forward = ["m_resource->handle"] + [a.name for a in e.arguments]

        w.line()
        w.block(f"void {q}::send{event_signature(e, ROLE, capitalize=True)}", [
            "if (!m_resource) {",
            "    return;",
            "}",
            f"{send}{call_args(forward)};",
        ])
        w.line()

        c_args = ["resource"] + [outbound_value(a) for a in e.arguments]
        w.block(f"void {q}::send{event_signature(e, ROLE, with_resource=True, capitalize=True)}", [
            *array_marshaling(e.arguments),
            f"{iface.name}_send_{e.name}{call_args(c_args)};",
        ])


def emit_server_cpp(protocol: Protocol, options: GeneratorOptions) -> str:
    """Generate the server implementation for every wrapped interface."""
    w = CodeWriter()
    write_preamble(w, options, header=False)

    stem = protocol_file_stem(protocol.name)
    header_name = options.header_name or default_header_name(protocol.name, ROLE)
    w.line(local_include(f"{stem}-server.h", options))
    w.line(local_include(header_name, options))

    for iface in emitted_interfaces(protocol.interfaces, ROLE):
        cls = to_identifier_case(iface.name, True)
        obj = strip_interface_prefix(iface.name, False, options.prefix) + "Object"

        w.line()
        _lifecycle_defs(w, iface, cls, obj)
        if iface.requests:
            _request_defs(w, iface, cls, obj)
        _event_defs(w, iface, cls)

    return w.text()
