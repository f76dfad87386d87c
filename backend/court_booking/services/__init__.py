"""
Services Layer

Pure business logic services that:
- Accept domain inputs (IDs, dates, times) and injected repositories
- Return domain outputs (models, ids, booleans)
- Do NOT depend on HTTP request/response objects
- Do NOT mutate data unless explicitly designed to (scheduler create/cancel,
  maintenance lifecycle transitions)
"""
