class AssetStampError(Exception):
    pass


class MinifyError(AssetStampError):
    def __init__(self, path, detail):
        self.path = path
        self.detail = detail
        super().__init__(f"{path}: {detail}")


class BuildError(AssetStampError):
    pass
