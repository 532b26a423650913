def test_root_package_reexports_expected_symbols():
    import codegen_state
    from codegen_state.migration.engine import StateMigration, migrate_if_needed
    from codegen_state.core.utils.state import StateStore

    assert isinstance(codegen_state.__version__, str)
    assert codegen_state.StateMigration is StateMigration
    assert codegen_state.migrate_if_needed is migrate_if_needed
    assert codegen_state.StateStore is StateStore
    assert codegen_state.core.configure_logging is codegen_state.configure_logging
