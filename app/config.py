from dynaconf import Dynaconf, Validator

settings = Dynaconf(
    settings_files=["settings.toml", ".secrets.toml"],
    environments=True,
    env_switcher="ENV_FOR_DYNACONF",
    envvar_prefix="BAILANYSTA",
    load_dotenv=True,
    validators=[
        Validator("DATABASE_URL", must_exist=True),
        Validator("SECRET_KEY", must_exist=True),
        Validator("TOKEN_EXPIRE_DAYS", default=7, gte=1),
        Validator("BCRYPT_ROUNDS", default=12, gte=4),
        Validator("PORT", default=5001),
        Validator("CORS_ORIGINS", default=["http://localhost:5173"]),
        Validator("NOTIFICATIONS_LIMIT", default=20, gte=1),
    ],
)
