"""Integration tests for end-to-end workflows."""

from abafile.cli.main import cli


def test_full_workflow(cli_runner, temp_db, tmp_path, fixtures_dir):
    """Test complete workflow: providers → batch → import → generate → fix details → regenerate → inspect."""
    db = ["--db-path", temp_db.database_path]

    # Step 1: Record providers, one without bank details
    result = cli_runner.invoke(
        cli,
        db + [
            "provider", "add", "Therapy Solutions",
            "--bsb", "032-001", "--account-number", "123456789", "--account-name", "THERAPY SOLUTIONS",
        ],
    )
    assert result.exit_code == 0
    result = cli_runner.invoke(cli, db + ["provider", "add", "Care Plus"])
    assert result.exit_code == 0

    # Step 2: Build the batch from a CSV file plus a manual entry
    assert cli_runner.invoke(cli, db + ["batch", "create", "PAY-100"]).exit_code == 0
    result = cli_runner.invoke(
        cli, db + ["batch", "import", "PAY-100", str(fixtures_dir / "sample_payments.csv")]
    )
    assert result.exit_code == 0
    assert "Imported: 2 payments" in result.output
    result = cli_runner.invoke(
        cli, db + ["batch", "add", "PAY-100", "Therapy Solutions", "99.99", "--reference", "INV-7"]
    )
    assert result.exit_code == 0

    # Step 3: Generate; Care Plus has no bank details yet
    remitter = [
        "--bsb", "032-000", "--account-number", "000000000",
        "--account-name", "OCTOCARE PTY LTD", "--date", "15/03/2024",
    ]
    first = tmp_path / "first.aba"
    result = cli_runner.invoke(cli, db + ["generate", "PAY-100", "-o", str(first)] + remitter)
    assert result.exit_code == 0
    assert "2 payment(s), total $2,599.99" in result.output
    assert "Skipped Care Plus ($1,750.50)" in result.output

    # Step 4: Add the missing bank details and regenerate
    result = cli_runner.invoke(
        cli,
        db + [
            "provider", "bank", "Care Plus",
            "--bsb", "062000", "--account-number", "987654321", "--account-name", "CARE PLUS PTY LTD",
        ],
    )
    assert result.exit_code == 0
    second = tmp_path / "second.aba"
    result = cli_runner.invoke(cli, db + ["generate", "PAY-100", "-o", str(second)] + remitter)
    assert result.exit_code == 0
    assert "3 payment(s), total $4,350.49" in result.output
    assert "Skipped" not in result.output

    # Step 5: Inspect the regenerated file
    result = cli_runner.invoke(cli, ["inspect", str(second)])
    assert result.exit_code == 0
    assert "Process on:  2024-03-15" in result.output
    assert "File totals are consistent." in result.output
    assert len(second.read_bytes()) == 5 * 122


def test_verbose_logs_exclusions(cli_runner, temp_db, sample_batch, tmp_path):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path, "--verbose",
            "generate", "PAY-001", "-o", str(tmp_path / "v.aba"),
            "--bsb", "032-000", "--account-number", "1", "--account-name", "OCTOCARE",
        ],
    )

    assert result.exit_code == 0
    assert "Excluding payment item" in result.output
    assert "Unbanked Support Co" in result.output
