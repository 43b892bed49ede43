"""Multi-modal classification gateway.

This package exposes text and image classification models behind an
authenticated REST API. The interesting part is the model lifecycle:

- Each modality (text, image) owns one lazily acquired inference function
- Acquisition is single-flight; concurrent callers share one in-flight load
- Requests are rejected with 503 until the model for their modality is ready
- Uploaded images are transient and always reclaimed after a grace period

Architecture Overview:
    - server.py: FastAPI application factory and routes
    - config/: Configuration modules (environment-based)
    - inference/: Backend adapter that materializes inference callables
    - models/: Per-modality registry and readiness gate
    - handlers/: Request validation, dispatch, uploads and artifact cleanup
    - runtime/: Startup wiring of the explicit dependency container
    - telemetry/: OpenTelemetry metrics/traces and Sentry reporting

Example:
    Start the server with uvicorn:

    $ uvicorn mmclassify.server:app --host 0.0.0.0 --port 3000

Environment Variables:
    Required:
        - API_KEY: Shared key for the /classify endpoints

    Optional:
        - TEXT_MODEL / IMAGE_MODEL: Hugging Face model IDs per modality
        - UPLOAD_DIR: Where incoming images are stored (default: uploads)
        - UPLOAD_CLEANUP_DELAY_S: Grace period before uploads are deleted
        - WAIT_FOR_MODELS_ON_STARTUP: Block startup until models are loaded
"""

__version__ = "1.0.0"
