"""Core utilities and shared infrastructure.

- config: Environment configuration loading and validation
- constants: Well-known file names, headers and endpoint paths
- exceptions: Custom exception hierarchy
- host_json: Read-only views over the host's ``host.json``
"""
