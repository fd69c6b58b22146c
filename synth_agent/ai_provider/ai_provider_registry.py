#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

from synth_agent.ai_provider.AiProviderKeys import AiProviderKeys

from synth_agent.ai_provider.OpenAiProvider import OpenAiProvider
from synth_agent.ai_provider.OllamaProvider import OllamaProvider
from synth_agent.ai_provider.LMStudioProvider import LMStudioProvider


ai_provider_registry = {
    # first entry is used as default for new profiles

    "groq": {
        "class": OpenAiProvider,
        "defaults": {
            AiProviderKeys.AI_PROVIDER: "groq",
            AiProviderKeys.AI_SERVER_URL: "https://api.groq.com/openai/v1",
            AiProviderKeys.AI_MODEL_GENERATE: "llama3-8b-8192",
            AiProviderKeys.AI_API_KEY_ENV: "GROQ_API_KEY",
        },
    },

    "openai": {
        "class": OpenAiProvider,
        "defaults": {
            AiProviderKeys.AI_PROVIDER: "openai",
            AiProviderKeys.AI_SERVER_URL: "https://api.openai.com/v1",
            AiProviderKeys.AI_MODEL_GENERATE: "gpt-4o-mini",
            AiProviderKeys.AI_API_KEY_ENV: "OPENAI_API_KEY",
        },
    },

    "ollama": {
        "class": OllamaProvider,
        "defaults": {
            AiProviderKeys.AI_PROVIDER: "ollama",
            AiProviderKeys.AI_SERVER_URL: "http://localhost:11434",
            AiProviderKeys.AI_MODEL_GENERATE: "llama3.1:8b",
            AiProviderKeys.AI_API_KEY_ENV: "",
        },
    },

    "lmstudio": {
        "class": LMStudioProvider,
        "defaults": {
            AiProviderKeys.AI_PROVIDER: "lmstudio",
            AiProviderKeys.AI_SERVER_URL: "http://localhost:1234/v1",
            AiProviderKeys.AI_MODEL_GENERATE: "meta-llama-3.1-8b-instruct",
            AiProviderKeys.AI_API_KEY_ENV: "",
        },
    },

}
