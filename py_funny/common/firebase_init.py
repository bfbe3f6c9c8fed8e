"""Firebase Admin app initialization."""

import firebase_admin

from common import config

# Initialize once at import so every function shares the default app.
if not firebase_admin._apps:  # pylint: disable=protected-access
  app = firebase_admin.initialize_app(options={"projectId": config.PROJECT_ID})
else:
  app = firebase_admin.get_app()
