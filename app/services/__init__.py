"""
Persona Morph Services Package - account, gallery and generation services.

Core Services:
- credential_service: Registration, login and session token validation
- gallery_service: Preferences and saved images scoped to the session's user
- generation: Client-side batch generation runs with auto-save
"""
