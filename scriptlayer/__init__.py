"""
Scriptlayer - Facade Registry for Scripting Clients

Exposes device platform capabilities (contacts, events, speech, bluetooth,
signal strength) as remotely invokable methods collected into a single
dispatch table keyed by method name.

Architecture:
- Each module is self-contained with clear interfaces
- Facades describe their own operations; nothing is discovered by reflection
- The registry is built once and is read-only afterwards
- Platform access goes through backend protocols supplied by the host

Modules:
- rpc: Method descriptors, receiver contract and RPC errors
- content: Structured data source contract and SQLite resolver
- facades: Platform capability providers
- registry: Method registry (FacadeConfiguration)
- dispatch: Per-session facade manager used by RPC servers
"""

__version__ = "1.0.0"
