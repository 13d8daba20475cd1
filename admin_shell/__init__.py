"""
Admin Shell.

- core/: Configuration, logging, database, cache, security, errors
- pipeline/: Route metadata decorators and the guarded route class
- guards/: Global guards (JWT, demo, role, permission, repeat submit, throttle)
- interceptors/: Global interceptors (operation log, request log, response
  transform, data scope)
- models/, repositories/, services/, schemas/: Admin domain
- api/: HTTP routers
- tasks/: Job queue broker and tasks
"""
