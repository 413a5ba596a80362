"""The sync triggers pipeline.

Each module performs one stage of a sync:
- discovery: Enumerate functions and proxies under the script root
- metadata: Trigger records and function responses
- secrets: Host keys and keys of HTTP functions
- payload: Assemble the sync document
- token: Sign the short-lived site token
- client: Post the document to the scale controller
- manager: Run the stages end to end
"""
