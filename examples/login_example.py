from automock import UNDEFINED, AutoMocker


class LoginService:
    def __init__(self):
        raise RuntimeError("LoginService talks to the network")

    def login(self, username: str, password: str) -> bool:
        raise RuntimeError("network")


class LoginModel:
    def __init__(self, service: LoginService):
        self.service = service
        self.username = ""
        self.password = ""

    def is_valid(self) -> bool:
        return bool(self.username) and bool(self.password)

    def submit(self) -> bool | None:
        if not self.is_valid():
            return False
        return self.service.login(self.username, self.password)


def main() -> None:
    mocker = AutoMocker()

    # Only LoginModel is built for real; LoginService is a pure proxy
    mocker.isolate(LoginModel)
    login = mocker.type(LoginService).mock(lambda s: s.login).returns(True)
    mocker.verify(login, lambda spy: spy.assert_called_once_with("ada", "secret"))

    model = mocker.resolve(LoginModel)
    print(f"Empty form submits: {model.submit()}")

    model.username = "ada"
    model.password = "secret"
    print(f"Filled form submits: {model.submit()}")

    # Unconfigured members of the proxy read as UNDEFINED
    print(f"Proxy attribute: {model.service.endpoint is UNDEFINED}")

    mocker.verify_all()
    print("All deferred verifications passed.")


if __name__ == "__main__":
    main()
