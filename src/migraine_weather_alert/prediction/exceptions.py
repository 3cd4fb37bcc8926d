class PredictionError(Exception):
    pass
