from . import generation, prediction
