from django.conf import settings
from django.shortcuts import render
from django.contrib.auth.decorators import login_required
from django.db.models import Count, Sum
from django.utils import timezone

from apps.activities.models import Activity
from apps.companies.models import Company
from apps.contacts.models import Contact
from apps.deals.models import Deal, DealStage


@login_required
def dashboard_view(request):
    """
    Main dashboard view
    - Headline numbers for contacts, deals and activities
    - Pipeline summary (deal count and value per stage)
    - Recent and upcoming activities
    """
    user = request.user
    now = timezone.now()

    deals_qs = Deal.objects.for_owner(user)
    activities_qs = Activity.objects.for_owner(user)

    # 1. Key Metrics
    total_contacts = Contact.objects.for_owner(user).count()
    total_companies = Company.objects.for_owner(user).count()
    total_deal_value = deals_qs.aggregate(total=Sum('value'))['total'] or 0

    won = deals_qs.won().aggregate(count=Count('id'), total=Sum('value'))
    won_deals = won['count']
    won_value = won['total'] or 0

    total_deals = deals_qs.count()
    open_deals = deals_qs.open().count()
    lost_deals = deals_qs.filter(stage__is_lost=True).count()
    closed = won_deals + lost_deals
    win_rate = (won_deals / closed * 100) if closed > 0 else 0

    overdue_count = activities_qs.overdue(now).count()

    # 2. Pipeline summary
    # Fetch counts and values in one query
    stage_totals = deals_qs.values('stage').annotate(count=Count('id'), total=Sum('value'))
    stage_total_map = {item['stage']: item for item in stage_totals}

    pipeline_summary = []
    for stage in DealStage.objects.for_owner(user).order_by('display_order'):
        totals = stage_total_map.get(stage.pk, {})
        count = totals.get('count', 0)
        pipeline_summary.append({
            'stage': stage,
            'count': count,
            'total': totals.get('total') or 0,
            'percentage': (count / total_deals * 100) if total_deals > 0 else 0,
        })

    # 3. Activities
    recent_activities = activities_qs.select_related('contact', 'deal').order_by('-created_at')[:10]
    upcoming_activities = activities_qs.upcoming(now).select_related('contact', 'deal')[:10]

    context = {
        'total_contacts': total_contacts,
        'total_companies': total_companies,
        'total_deal_value': total_deal_value,
        'won_deals': won_deals,
        'won_value': won_value,
        'open_deals': open_deals,
        'win_rate': win_rate,
        'overdue_count': overdue_count,
        'pipeline_summary': pipeline_summary,
        'recent_activities': recent_activities,
        'upcoming_activities': upcoming_activities,
        'total_deals': total_deals,
        'currency': getattr(settings, 'CRM_DEFAULT_CURRENCY', 'USD'),
        'active_page': 'dashboard',
    }

    return render(request, 'core/dashboard.html', context)
