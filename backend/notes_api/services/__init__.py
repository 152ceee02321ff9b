# Services package init
"""
Notes API — Services Layer
===========================

Service Inventory:
    - TokenVerifier (abstract): Interface for bearer-token verification
    - SupabaseTokenVerifier: Concrete verifier using Supabase Auth
    - NoteService: User-scoped list/count/insert against the notes table

Services never touch Request or Response objects; they take the Supabase
client and an AuthenticatedPrincipal and return response models or raise
NotesApiError subclasses.
"""
