from app.core.config import Settings


class TestSettings(Settings):
    __test__ = False

    DATABASE_URL: str = "sqlite+aiosqlite://"
    S3_BUCKET_NAME: str = "recipe-images-test"
    S3_PUBLIC_ENDPOINT: str = "http://storage.test"


test_settings = TestSettings()
