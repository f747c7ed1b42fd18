"""
Adapter base package.

Provider-independent building blocks used by the Vertex adapter:

- Errors: normalized taxonomy and classification
- Cancellation: cooperative, asyncio-aware tokens
- Logging: shared JSON logger and structured events
- Models / DTOs: request types and inbound validation
- Streaming: event framing, payload classification, the stream interpreter
"""
