import logging


def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    # Per-request wire logging from the AWS SDK drowns out the service logs
    for logger_name in ["botocore", "boto3", "urllib3"]:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
