"""
Cross-cutting helpers for the Lombard registry.

Configuration (environment driven settings) and logging setup live here so
repositories and routers never read os.environ directly.
"""
