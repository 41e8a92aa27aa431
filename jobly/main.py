from jobly.api.main import app

if __name__ == "__main__":
    import logging
    import os
    import uvicorn

    from jobly.core.config import load_config

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    host = os.getenv("JOBLY_HOST", "0.0.0.0")
    uvicorn.run(app, host=host, port=load_config().port)
