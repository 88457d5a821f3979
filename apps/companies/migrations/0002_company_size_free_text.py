from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('companies', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='company',
            name='size',
            field=models.CharField(blank=True, help_text='Headcount bracket, e.g. 11-50', max_length=20),
        ),
    ]
