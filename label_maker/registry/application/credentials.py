from label_maker.config.logger_config import logger
from label_maker.registry.application.ports import KeyValueStorePort, PromptPort

CREDENTIAL_KEY = "userAgent"
PROMPT_TEXT = "Please enter your User-Agent: "


class StoredCredentialProvider:
    """
    Resolves the User-Agent sent to the registry.

    A preset (from the environment) always wins and is never persisted. Without
    one, the stored value is used, and the operator is asked once when it is
    missing. The answer is kept exactly as typed.
    """

    def __init__(
        self,
        store: KeyValueStorePort,
        prompt_io: PromptPort,
        preset: str | None = None,
    ) -> None:
        self.store = store
        self.prompt_io = prompt_io
        self.preset = preset

    def obtain(self) -> str:
        if self.preset:
            return self.preset

        stored = self.store.get(CREDENTIAL_KEY)
        if isinstance(stored, str) and stored:
            return stored

        logger.info("No stored User-Agent; prompting operator.")
        credential = self.prompt_io.input(PROMPT_TEXT)

        if not credential:
            # 使用者拒絕輸入時仍以空字串送出請求
            logger.warning("No User-Agent provided; requests will be sent with an empty one.")
            return ""

        self.store.set(CREDENTIAL_KEY, credential)
        return credential
