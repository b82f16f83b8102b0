import waterrights

ADMIN = "ST1ADMIN00000000000000000000000000000ADMIN"


def main() -> None:
    srv = waterrights.run(port=0, admin=ADMIN, log_level="warning")
    client = srv.client() if isinstance(srv, waterrights.RegistryServer) else srv

    print("register alice:", client.register_rights_holder(ADMIN, "alice", 1000).to_dict())
    print("alice reports 300:", client.report_usage("alice", 300).to_dict())
    print("alice reports 1500:", client.report_usage("alice", 1500).to_dict())

    client.suspend_holder(ADMIN, "alice")
    print("suspended alice reports 10:", client.report_usage("alice", 10).to_dict())

    print("state:", client.snapshot().to_dict())

    if isinstance(srv, waterrights.RegistryServer):
        srv.stop()


if __name__ == "__main__":
    main()
