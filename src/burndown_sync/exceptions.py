class BurndownError(RuntimeError):
    pass


class NotTargetSheetError(BurndownError):
    pass
