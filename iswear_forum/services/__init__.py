"""Services package for the forum.

Import services from their modules (`iswear_forum.services.auth_service`);
the CRUD layer imports `views` from here, so this package stays import-free.
"""
