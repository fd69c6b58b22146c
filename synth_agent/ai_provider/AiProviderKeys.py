#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.


class AiProviderKeys:
    AI_PROVIDER = 'ai_provider'
    AI_SERVER_URL = 'ai_server_url'
    AI_MODEL_GENERATE = 'ai_model_generate'
    AI_API_KEY_ENV = 'ai_api_key_env'
    AI_TIMEOUT_S = 'ai_timeout_s'
    AI_RETRIES = 'ai_retries'
