"""Core: исключения, логирование, credential sets, модели."""
